from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, Iterable, Protocol

from gridframe.config import UNIT_Y_MARGIN
from gridframe.raster import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, text_size
from gridframe.scene import AxisGroup, TickText

LOGGER = logging.getLogger(__name__)


class TextMetrics(Protocol):
    def text_size(self, text: str, rotate_deg: int = 0) -> tuple[float, float]:
        ...


@dataclass(frozen=True)
class PillowTextMetrics:
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX

    def text_size(self, text: str, rotate_deg: int = 0) -> tuple[float, float]:
        w, h = text_size(text, font_family=self.font_family, font_size_px=self.font_size_px, rotate_deg=rotate_deg)
        return (float(w), float(h))


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("BoundingBox width/height must be >= 0")

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> "BoundingBox | None":
        xs: list[float] = []
        ys: list[float] = []
        for px, py in points:
            xs.append(px)
            ys.append(py)
        if not xs:
            return None
        return cls(x=min(xs), y=min(ys), width=max(xs) - min(xs), height=max(ys) - min(ys))

    def corners(self) -> list[tuple[float, float]]:
        return [
            (self.x, self.y),
            (self.x + self.width, self.y),
            (self.x, self.y + self.height),
            (self.x + self.width, self.y + self.height),
        ]

    def translated(self, dx: float, dy: float) -> "BoundingBox":
        return BoundingBox(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)


EMPTY_BOX = BoundingBox(0.0, 0.0, 0.0, 0.0)


def _rotate(x: float, y: float, rotate_deg: int) -> tuple[float, float]:
    # Screen space (y down): positive angles turn clockwise.
    rad = math.radians(rotate_deg)
    c = round(math.cos(rad), 12)
    s = round(math.sin(rad), 12)
    return (x * c - y * s, x * s + y * c)


def text_box(node: TickText, metrics: TextMetrics, default_anchor: str = "middle") -> BoundingBox | None:
    """Box covered by a tick label, in its group's coordinates.

    Returns None for empty text, which occupies no space.
    """
    if not node.text:
        return None
    w, h = metrics.text_size(node.text, 0)
    anchor = node.anchor or default_anchor
    bx = node.x - {"start": 0.0, "middle": w / 2.0, "end": w}[anchor]
    by = node.y - (h / 2.0 if node.baseline == "middle" else 0.0)
    local = BoundingBox(bx, by, w, h)
    if node.rotate_deg == 0:
        return local.translated(*node.offset)
    px, py = node.pivot if node.pivot is not None else (node.x, node.y)
    points = []
    for cx, cy in local.corners():
        rx, ry = _rotate(cx - px + node.offset[0], cy - py + node.offset[1], node.rotate_deg)
        points.append((px + rx, py + ry))
    return BoundingBox.from_points(points)


def measure_group(group: AxisGroup | None, metrics: TextMetrics) -> BoundingBox:
    """Bounding box of everything in `group`, including paint-hidden texts."""
    if group is None:
        return EMPTY_BOX
    points: list[tuple[float, float]] = []
    for line in group.lines:
        points.extend([(line.x1, line.y1), (line.x2, line.y2)])
    for node in group.texts:
        box = text_box(node, metrics, group.default_anchor)
        if box is not None:
            points.extend(box.corners())
    box = BoundingBox.from_points(points)
    if box is None:
        return EMPTY_BOX
    return box.translated(*group.translate)


@dataclass(frozen=True)
class ResizeEntry:
    node: AxisGroup
    width: float
    height: float


class SizeObserver:
    """Tracks the measured size of a set of nodes.

    `poll()` delivers one batch of entries for the nodes whose size changed
    since their last delivery; a newly observed node always delivers once.
    """

    def __init__(
        self,
        callback: Callable[[list[ResizeEntry]], None],
        measure: Callable[[AxisGroup], BoundingBox],
    ) -> None:
        self._callback = callback
        self._measure = measure
        self._observed: dict[int, AxisGroup] = {}
        self._last: dict[int, tuple[float, float]] = {}

    def observe(self, node: AxisGroup) -> None:
        if node.node_id in self._observed:
            return
        self._observed[node.node_id] = node

    def unobserve(self, node: AxisGroup | None) -> None:
        if node is None:
            return
        self._observed.pop(node.node_id, None)
        self._last.pop(node.node_id, None)

    def disconnect(self) -> None:
        self._observed.clear()
        self._last.clear()

    def is_observing(self, node: AxisGroup | None) -> bool:
        return node is not None and node.node_id in self._observed

    def poll(self) -> list[ResizeEntry]:
        entries: list[ResizeEntry] = []
        for node_id, node in list(self._observed.items()):
            box = self._measure(node)
            size = (box.width, box.height)
            if self._last.get(node_id) == size:
                continue
            self._last[node_id] = size
            entries.append(ResizeEntry(node=node, width=box.width, height=box.height))
        if entries:
            self._callback(entries)
        return entries


@dataclass(frozen=True)
class FrameSize:
    x_axis_height: float
    y_axis_width: float


class MeasurementFeedbackLoop:
    """Turns label-group measurements into `FrameSize` reports.

    Only the currently observed x/y label groups contribute; the bottom axis
    height is padded with `unit_margin`. The callback runs only when the
    resulting frame size differs from the previous report.
    """

    def __init__(
        self,
        on_frame_size_change: Callable[[FrameSize], None],
        *,
        metrics: TextMetrics | None = None,
        unit_margin: float = UNIT_Y_MARGIN,
    ) -> None:
        self._on_frame_size_change = on_frame_size_change
        self._metrics: TextMetrics = metrics if metrics is not None else PillowTextMetrics()
        self._unit_margin = float(unit_margin)
        self._observer = SizeObserver(self._on_resize, measure=self._measure)
        self._x_node: AxisGroup | None = None
        self._y_node: AxisGroup | None = None
        self._x_height = 0.0
        self._y_width = 0.0
        self._reported: FrameSize | None = None

    def __enter__(self) -> "MeasurementFeedbackLoop":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def frame_size(self) -> FrameSize:
        return FrameSize(x_axis_height=self._x_height + self._unit_margin, y_axis_width=self._y_width)

    @property
    def last_reported(self) -> FrameSize | None:
        return self._reported

    def is_observing(self, node: AxisGroup | None) -> bool:
        return self._observer.is_observing(node)

    def _measure(self, node: AxisGroup) -> BoundingBox:
        return measure_group(node, self._metrics)

    def sync(self, x_group: AxisGroup | None, y_group: AxisGroup | None) -> None:
        """Observe the visible label groups and release the ones that went away."""
        if x_group is not self._x_node:
            self._observer.unobserve(self._x_node)
            self._x_node = x_group
            self._x_height = 0.0
            if x_group is not None:
                self._observer.observe(x_group)
        if y_group is not self._y_node:
            self._observer.unobserve(self._y_node)
            self._y_node = y_group
            self._y_width = 0.0
            if y_group is not None:
                self._observer.observe(y_group)

    def poll(self) -> FrameSize:
        self._observer.poll()
        self._publish()
        return self.frame_size

    def report(self, node: AxisGroup, *, width: float = 0.0, height: float = 0.0) -> None:
        """Entry point for size notifications pushed by a host environment."""
        self._on_resize([ResizeEntry(node=node, width=float(width), height=float(height))])

    def _on_resize(self, entries: list[ResizeEntry]) -> None:
        applied = False
        for entry in entries:
            if not self._observer.is_observing(entry.node):
                LOGGER.debug("ignoring size notification for unobserved node %s", entry.node.name)
                continue
            if entry.node is self._x_node:
                self._x_height = entry.height
                applied = True
            elif entry.node is self._y_node:
                self._y_width = entry.width
                applied = True
        if applied:
            self._publish()

    def _publish(self) -> None:
        size = self.frame_size
        if size == self._reported:
            return
        self._reported = size
        self._on_frame_size_change(size)

    def close(self) -> None:
        self._observer.disconnect()
        self._x_node = None
        self._y_node = None
