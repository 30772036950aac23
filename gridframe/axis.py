from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import Callable, Sequence

from gridframe.scales import Scale
from gridframe.scene import AxisGroup, TextAnchor, TickLine, TickText


DEFAULT_TICK_SIZE = 6.0
DEFAULT_TICK_PADDING = 3.0


class AxisDirection(str, Enum):
    BOTTOM = "axisBottom"
    LEFT = "axisLeft"


@dataclass(frozen=True)
class AxisGenerator:
    """Projects tick values through a scale into positioned tick primitives.

    Bottom axes grow downwards from y=0, left axes grow leftwards from x=0. A
    negative `tick_size` flips the tick line across the axis, which is how
    full-width grid lines are produced for the left axis.
    """

    direction: AxisDirection
    scale: Scale
    tick_values: tuple[float, ...]
    tick_size: float = DEFAULT_TICK_SIZE
    tick_padding: float = DEFAULT_TICK_PADDING
    tick_format: Callable[[float], str] | None = None

    @property
    def default_anchor(self) -> TextAnchor:
        return "middle" if self.direction is AxisDirection.BOTTOM else "end"

    def __call__(self, group: AxisGroup) -> AxisGroup:
        group.lines.clear()
        group.texts.clear()
        group.default_anchor = self.default_anchor
        spacing = max(self.tick_size, 0.0) + self.tick_padding
        for value in self.tick_values:
            pos = self.scale.scale(value)
            if pos is None or not math.isfinite(pos):
                continue
            if self.direction is AxisDirection.BOTTOM:
                group.lines.append(TickLine(value=value, x1=pos, y1=0.0, x2=pos, y2=self.tick_size))
                text_xy = (pos, spacing)
                baseline = "top"
            else:
                group.lines.append(TickLine(value=value, x1=0.0, y1=pos, x2=-self.tick_size, y2=pos))
                text_xy = (-spacing, pos)
                baseline = "middle"
            if self.tick_format is None:
                continue
            group.texts.append(
                TickText(
                    value=value,
                    text=self.tick_format(value),
                    x=text_xy[0],
                    y=text_xy[1],
                    baseline=baseline,  # type: ignore[arg-type]
                )
            )
        return group


def axis_bottom(scale: Scale, tick_values: Sequence[float], **kwargs) -> AxisGenerator:
    return AxisGenerator(direction=AxisDirection.BOTTOM, scale=scale, tick_values=tuple(tick_values), **kwargs)


def axis_left(scale: Scale, tick_values: Sequence[float], **kwargs) -> AxisGenerator:
    return AxisGenerator(direction=AxisDirection.LEFT, scale=scale, tick_values=tuple(tick_values), **kwargs)
