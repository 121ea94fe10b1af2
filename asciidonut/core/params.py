from __future__ import annotations

from dataclasses import dataclass, replace

from .exceptions import ParamsError

LUMINANCE_RAMP = ".,-~:;=!*#$@"


@dataclass
class DonutParams:
    viewport: int = 80
    theta_spacing: float = 0.04
    phi_spacing: float = 0.01
    a_spacing: float = 0.07
    b_spacing: float = 0.07
    donut_thickness: float = 1.0
    donut_radius: float = 2.0
    distance_to_donut: float = 15.0
    ms_per_render: int = 50
    ramp: str = LUMINANCE_RAMP
    interactive: bool = True

    @property
    def projection(self) -> float:
        return (
            self.viewport * self.distance_to_donut * 3
            / (8 * (self.donut_thickness + self.donut_radius))
        )

    @property
    def frame_interval(self) -> float:
        return self.ms_per_render / 1000.0

    def validate(self) -> "DonutParams":
        if self.viewport < 1:
            raise ParamsError(f"viewport must be at least 1, got {self.viewport}")
        for name in ("theta_spacing", "phi_spacing", "a_spacing", "b_spacing"):
            if getattr(self, name) <= 0:
                raise ParamsError(f"{name} must be positive")
        if self.donut_thickness <= 0 or self.donut_radius <= 0:
            raise ParamsError("donut_thickness and donut_radius must be positive")
        # z stays positive only while the camera sits outside the torus
        if self.distance_to_donut < self.donut_radius + self.donut_thickness:
            raise ParamsError(
                "distance_to_donut must be >= donut_radius + donut_thickness "
                f"({self.distance_to_donut} < {self.donut_radius + self.donut_thickness})"
            )
        if self.ms_per_render < 0:
            raise ParamsError("ms_per_render must not be negative")
        if not self.ramp:
            raise ParamsError("luminance ramp must not be empty")
        return self


INTERACTIVE = DonutParams()
SPIN = DonutParams(distance_to_donut=10.0, b_spacing=0.02, interactive=False)

PRESETS = {
    "interactive": INTERACTIVE,
    "spin": SPIN,
}


def preset(name: str, **overrides) -> DonutParams:
    """Return a validated copy of the named preset with ``overrides`` applied."""
    try:
        base = PRESETS[name]
    except KeyError:
        raise ParamsError(
            f"unknown preset {name!r} (choose from {', '.join(sorted(PRESETS))})"
        ) from None
    return replace(base, **overrides).validate()
