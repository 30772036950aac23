from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

from gridframe.config import FrameProps
from gridframe.errors import FrameConfigError
from gridframe.frame import Frame
from gridframe.measure import FrameSize

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 8


@dataclass(frozen=True)
class FitResult:
    plot_width: float
    plot_height: float
    frame_size: FrameSize
    passes: int
    converged: bool


def fit_frame(
    frame: Frame,
    outer_width: float,
    outer_height: float,
    make_props: Callable[[float, float], FrameProps],
    *,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> FitResult:
    """Shrink the plot area until the axes' measured space stops changing.

    `make_props(plot_width, plot_height)` must rebuild the scales for the given
    plot size. The loop starts from the full outer size and subtracts the
    reported frame size after every pass.
    """
    if outer_width <= 0 or outer_height <= 0:
        raise FrameConfigError("outer width and height must be > 0")
    if max_passes <= 0:
        raise FrameConfigError("max_passes must be > 0")

    plot_w = float(outer_width)
    plot_h = float(outer_height)
    frame_size = FrameSize(x_axis_height=0.0, y_axis_width=0.0)
    for passes in range(1, max_passes + 1):
        frame_size = frame.layout(make_props(plot_w, plot_h)).frame_size
        next_w = max(0.0, float(outer_width) - frame_size.y_axis_width)
        next_h = max(0.0, float(outer_height) - frame_size.x_axis_height)
        if next_w == plot_w and next_h == plot_h:
            return FitResult(plot_w, plot_h, frame_size, passes, converged=True)
        plot_w, plot_h = next_w, next_h

    LOGGER.warning("frame layout did not settle after %d passes", max_passes)
    return FitResult(plot_w, plot_h, frame_size, max_passes, converged=False)
