from __future__ import annotations

from gridframe.config import FrameProps, GridConfig, GridConfigItem
from gridframe.scales import LinearScale


class FixedMetrics:
    """Monospace stand-in for font metrics: 6px per character, 10px tall."""

    char_w = 6.0
    line_h = 10.0

    def text_size(self, text: str, rotate_deg: int = 0) -> tuple[float, float]:
        w = self.char_w * len(text)
        h = self.line_h if text else 0.0
        if rotate_deg % 180:
            return (h, w)
        return (w, h)


def make_props(width: float = 200.0, height: float = 100.0, **overrides) -> FrameProps:
    kwargs = dict(
        width=width,
        height=height,
        scale_x=LinearScale.from_bounds((-10.0, 10.0), (0.0, width)),
        scale_y=LinearScale.from_bounds((0.0, 1.0), (height, 0.0)),
        grid_config=GridConfig(x=GridConfigItem(show_guide=True), y=GridConfigItem()),
        x_tick_values=(-10.0, -5.0, 5.0, 10.0),
        y_tick_values=(0.0, 0.5, 1.0),
    )
    kwargs.update(overrides)
    return FrameProps(**kwargs)
