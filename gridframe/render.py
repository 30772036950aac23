from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from gridframe.frame import AXIS_LINE_CLASS
from gridframe.measure import BoundingBox, PillowTextMetrics, measure_group, text_box
from gridframe.raster import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    RGBA,
    draw_segment,
    draw_text,
    new_canvas,
)
from gridframe.scene import AxisGroup, FrameScene
from gridframe.zero_line import LinePosition


@dataclass(frozen=True)
class FrameStyle:
    background: RGBA = (255, 255, 255, 255)
    grid_color: RGBA = (220, 224, 230, 255)
    guide_color: RGBA = (90, 98, 110, 255)
    guide_width: int = 2
    tick_color: RGBA = (150, 156, 166, 255)
    text_color: RGBA = (60, 66, 76, 255)
    zero_line_color: RGBA = (40, 44, 52, 255)
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX


@dataclass(frozen=True)
class RenderedFrame:
    rgba: np.ndarray
    # canvas pixel of the plot area top-left corner
    origin: tuple[int, int]


def render_frame(
    scene: FrameScene,
    plot_width: float,
    plot_height: float,
    *,
    style: FrameStyle | None = None,
    zero_line: LinePosition | None = None,
) -> RenderedFrame:
    """Paint a laid-out scene onto a canvas just large enough to hold it."""
    style = style or FrameStyle()
    metrics = PillowTextMetrics(font_family=style.font_family, font_size_px=style.font_size_px)

    points = BoundingBox(0.0, 0.0, float(plot_width), float(plot_height)).corners()
    for group in scene.groups():
        points.extend(measure_group(group, metrics).corners())
    bounds = BoundingBox.from_points(points)
    assert bounds is not None
    ox = int(math.ceil(-bounds.x)) + 1
    oy = int(math.ceil(-bounds.y)) + 1
    width = int(math.ceil(bounds.width)) + 2
    height = int(math.ceil(bounds.height)) + 2
    canvas = new_canvas(width, height, color=style.background)

    for grid in (scene.x_grid, scene.y_grid):
        if grid is None:
            continue
        _paint_lines(canvas, grid, ox, oy, style, is_grid=True)
    if zero_line is not None:
        draw_segment(
            canvas,
            ox + zero_line.x1,
            oy + zero_line.y1,
            ox + zero_line.x2,
            oy + zero_line.y2,
            style.zero_line_color,
        )
    for group in (scene.x_labels, scene.y_labels, scene.y_unit):
        if group is None or group.is_hidden:
            continue
        _paint_lines(canvas, group, ox, oy, style, is_grid=False)
        _paint_texts(canvas, group, ox, oy, style, metrics)
    return RenderedFrame(rgba=canvas, origin=(ox, oy))


def _paint_lines(canvas: np.ndarray, group: AxisGroup, ox: int, oy: int, style: FrameStyle, *, is_grid: bool) -> None:
    dx = ox + group.translate[0]
    dy = oy + group.translate[1]
    for line in group.lines:
        if not line.visible:
            continue
        if is_grid and AXIS_LINE_CLASS in line.class_name:
            color, width = style.guide_color, style.guide_width
        else:
            color, width = (style.grid_color if is_grid else style.tick_color), 1
        draw_segment(canvas, dx + line.x1, dy + line.y1, dx + line.x2, dy + line.y2, color, width)


def _paint_texts(
    canvas: np.ndarray,
    group: AxisGroup,
    ox: int,
    oy: int,
    style: FrameStyle,
    metrics: PillowTextMetrics,
) -> None:
    dx = ox + group.translate[0]
    dy = oy + group.translate[1]
    for node in group.texts:
        if not node.visible:
            continue
        box = text_box(node, metrics, group.default_anchor)
        if box is None:
            continue
        draw_text(
            canvas,
            int(round(dx + box.x)),
            int(round(dy + box.y)),
            node.text,
            style.text_color,
            font_family=style.font_family,
            font_size_px=style.font_size_px,
            rotate_deg=node.rotate_deg,
        )
