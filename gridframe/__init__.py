from gridframe.config import FrameProps, GridConfig, GridConfigItem, TICK_PADDING, UNIT_Y_MARGIN, X_TICK_OFFSET
from gridframe.errors import FrameConfigError
from gridframe.fit import FitResult, fit_frame
from gridframe.formatting import default_format_label, percent_format_label, resolve_label_formatter
from gridframe.frame import AxisLabelSpec, Frame, FrameLayout
from gridframe.measure import BoundingBox, FrameSize, MeasurementFeedbackLoop, PillowTextMetrics, SizeObserver
from gridframe.render import FrameStyle, RenderedFrame, render_frame
from gridframe.scales import LinearScale, Scale, is_in_domain, nice_ticks
from gridframe.ticks import add_guide_to_ticks, get_guide_value, grid_ticks_with_guide, resolve_visibility
from gridframe.zero_line import LinePosition, resolve_zero_line

__all__ = [
    "AxisLabelSpec",
    "BoundingBox",
    "FitResult",
    "Frame",
    "FrameConfigError",
    "FrameLayout",
    "FrameProps",
    "FrameSize",
    "FrameStyle",
    "GridConfig",
    "GridConfigItem",
    "LinePosition",
    "LinearScale",
    "MeasurementFeedbackLoop",
    "PillowTextMetrics",
    "RenderedFrame",
    "Scale",
    "SizeObserver",
    "TICK_PADDING",
    "UNIT_Y_MARGIN",
    "X_TICK_OFFSET",
    "add_guide_to_ticks",
    "default_format_label",
    "fit_frame",
    "get_guide_value",
    "grid_ticks_with_guide",
    "is_in_domain",
    "nice_ticks",
    "percent_format_label",
    "render_frame",
    "resolve_label_formatter",
    "resolve_visibility",
    "resolve_zero_line",
]
