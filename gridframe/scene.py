from __future__ import annotations

from dataclasses import dataclass, field
import itertools
from typing import Literal

TextAnchor = Literal["start", "middle", "end"]
Baseline = Literal["top", "middle"]

_NODE_IDS = itertools.count(1)


@dataclass
class TickLine:
    value: float
    x1: float
    y1: float
    x2: float
    y2: float
    class_name: str = ""
    visible: bool = True


@dataclass
class TickText:
    """One tick label.

    (x, y) is the anchor point relative to the owning group; `anchor` picks the
    horizontal alignment of the text box around it and `baseline` the vertical
    one. `offset` is applied in rotated space and rotation turns around `pivot`
    (the anchor point when unset).
    """

    value: float
    text: str
    x: float
    y: float
    anchor: TextAnchor | None = None
    baseline: Baseline = "top"
    rotate_deg: int = 0
    offset: tuple[float, float] = (0.0, 0.0)
    pivot: tuple[float, float] | None = None
    visible: bool = True


@dataclass(eq=False)
class AxisGroup:
    """A mounted node of the frame scene.

    Identity is stable while the group stays mounted; `clear()` wipes its
    content so every layout pass rebuilds it from scratch.
    """

    name: str
    class_name: str = ""
    translate: tuple[float, float] = (0.0, 0.0)
    default_anchor: TextAnchor = "middle"
    lines: list[TickLine] = field(default_factory=list)
    texts: list[TickText] = field(default_factory=list)
    node_id: int = field(default_factory=lambda: next(_NODE_IDS))

    def clear(self) -> None:
        self.lines.clear()
        self.texts.clear()
        self.translate = (0.0, 0.0)

    @property
    def is_hidden(self) -> bool:
        return "isYLabelsHidden" in self.class_name


@dataclass
class FrameScene:
    x_grid: AxisGroup | None = None
    y_grid: AxisGroup | None = None
    x_labels: AxisGroup | None = None
    y_labels: AxisGroup | None = None
    y_unit: AxisGroup | None = None

    def mount(self, slot: str, present: bool, *, class_name: str = "") -> AxisGroup | None:
        """Keep, create or drop the group in `slot` according to `present`."""
        current: AxisGroup | None = getattr(self, slot)
        if not present:
            setattr(self, slot, None)
            return None
        if current is None:
            current = AxisGroup(name=slot)
            setattr(self, slot, current)
        current.class_name = class_name
        return current

    def groups(self) -> list[AxisGroup]:
        return [g for g in (self.x_grid, self.y_grid, self.x_labels, self.y_labels, self.y_unit) if g is not None]
