from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from gridframe.errors import FrameConfigError
from gridframe.scales import Scale, nice_ticks, padded_limits


TICK_PADDING = 15
X_TICK_OFFSET = 18
UNIT_Y_MARGIN = 8
LABEL_TICK_SIZE = 6
DEFAULT_GUIDE_VALUE = 0.0
DEFAULT_GRID_TICKS = 5

FormatValue = Callable[[float], str]

_CAMEL_KEYS = {
    "showGuide": "show_guide",
    "showGrid": "show_grid",
    "gridTicks": "grid_ticks",
    "withPaddings": "with_paddings",
}


@dataclass(frozen=True)
class GridConfigItem:
    show_guide: bool | None = None
    show_grid: bool = True
    min: float | None = None
    max: float | None = None
    grid_ticks: int | None = None
    with_paddings: bool = False

    def __post_init__(self) -> None:
        if self.grid_ticks is not None and self.grid_ticks <= 0:
            raise FrameConfigError("grid_ticks must be > 0")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise FrameConfigError("min must be <= max")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "GridConfigItem":
        if raw is None:
            return cls()
        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise FrameConfigError(f"unknown grid config key: {key}")
            kwargs[name] = value
        # An explicit None means "use the default", same as an absent key.
        if kwargs.get("show_grid") is None:
            kwargs.pop("show_grid", None)
        return cls(**kwargs)

    def resolve_domain(self, data_min: float, data_max: float) -> tuple[float, float]:
        lo = float(min(data_min, data_max))
        hi = float(max(data_min, data_max))
        if self.with_paddings:
            lo, hi = padded_limits(lo, hi)
        if self.min is not None:
            lo = float(self.min)
        if self.max is not None:
            hi = float(self.max)
        return (lo, hi)

    def tick_candidates(self, domain: Sequence[float], default_target: int = DEFAULT_GRID_TICKS) -> tuple[float, ...]:
        lo = float(min(domain))
        hi = float(max(domain))
        target = self.grid_ticks if self.grid_ticks is not None else default_target
        return tuple(float(v) for v in nice_ticks(lo, hi, target))


@dataclass(frozen=True)
class GridConfig:
    x: GridConfigItem = field(default_factory=GridConfigItem)
    y: GridConfigItem = field(default_factory=GridConfigItem)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Any] | None]) -> "GridConfig":
        return cls(x=GridConfigItem.from_mapping(raw.get("x")), y=GridConfigItem.from_mapping(raw.get("y")))


@dataclass(frozen=True)
class FrameProps:
    """Inputs of one layout pass.

    `width`/`height` are the plot area in pixels. Scales may be `None` while the
    caller has not computed them yet; that axis is skipped.
    """

    width: float
    height: float
    scale_x: Scale | None
    scale_y: Scale | None
    grid_config: GridConfig = field(default_factory=GridConfig)
    x_tick_values: Sequence[float] = ()
    y_tick_values: Sequence[float] = ()
    y_dimension_unit: str | None = None
    y_labels_show_in_percent: bool = False
    x_labels_show_vertical: bool = False
    x_hide_first_label: bool = False
    format_value_for_label: FormatValue | None = None
    format_y_value_for_label: FormatValue | None = None
    hide_y_labels: bool = False
    show_only_y: bool = False
    guide_value: float = DEFAULT_GUIDE_VALUE

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise FrameConfigError("width and height must be >= 0")
