"""Core rendering primitives for asciidonut.

Modules:
- params: torus geometry, sampling and timing parameters + presets
- geometry: surface sampling, rotation, projection and shading
- framebuffer: character grid + inverse-depth grid
- playback: keyboard-driven playback state machine
- controller: angle state and the frame loop
"""
