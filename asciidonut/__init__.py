"""asciidonut: a rotating torus rendered as ASCII art in the terminal."""

__version__ = "0.1.0"
