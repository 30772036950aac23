from __future__ import annotations

from dataclasses import dataclass
import math

from gridframe.scales import Scale


@dataclass(frozen=True)
class LinePosition:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def is_vertical(self) -> bool:
        return self.x1 == self.x2


def line_position(position: float, is_horizontal: bool, *, width: float, height: float) -> LinePosition:
    """Endpoints of a reference line at `position` on the value axis.

    A horizontal chart lays values out along x, so its reference line is
    vertical and spans the full height; otherwise it spans the full width.
    """
    if is_horizontal:
        return LinePosition(x1=position, y1=0.0, x2=position, y2=float(height))
    return LinePosition(x1=0.0, y1=position, x2=float(width), y2=position)


def resolve_zero_line(
    scale: Scale | None,
    is_horizontal: bool,
    *,
    width: float,
    height: float,
    value: float = 0.0,
) -> LinePosition | None:
    if scale is None:
        return None
    scaled = scale.scale(value)
    # A zero or missing pixel position means there is nothing to draw.
    if not scaled or not math.isfinite(scaled):
        return None
    return line_position(scaled, is_horizontal, width=width, height=height)
