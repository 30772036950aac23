from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Sequence

from gridframe.scales import is_in_domain


TickSet = tuple[float, ...]


def get_guide_value(*, show_guide: bool | None, value: float, domain: Sequence[float]) -> float | None:
    """Return `value` when the guide is enabled and lies inside `domain`."""
    if show_guide and is_in_domain(value, domain):
        return float(value)
    return None


def add_guide_to_ticks(ticks: Iterable[float], guide_value: float | None) -> TickSet:
    values = {float(v) for v in ticks if _is_finite(v)}
    if guide_value is not None:
        values.add(float(guide_value))
    # -0.0 and 0.0 compare equal so the set already holds a single zero.
    return tuple(sorted(values))


def grid_ticks_with_guide(
    *,
    x_tick_values: Iterable[float],
    y_tick_values: Iterable[float],
    x_guide_value: float | None,
    y_guide_value: float | None,
) -> tuple[TickSet, TickSet]:
    return (
        add_guide_to_ticks(x_tick_values, x_guide_value),
        add_guide_to_ticks(y_tick_values, y_guide_value),
    )


@dataclass(frozen=True)
class AxisVisibility:
    grids_hidden: bool
    x_show_grid: bool
    y_show_grid: bool
    x_show_labels: bool
    y_show_labels: bool


def resolve_visibility(
    *,
    x_show_grid: bool,
    y_show_grid: bool,
    x_ticks: Sequence[float],
    y_ticks: Sequence[float],
) -> AxisVisibility:
    grids_hidden = not x_show_grid and not y_show_grid
    return AxisVisibility(
        grids_hidden=grids_hidden,
        x_show_grid=bool(x_show_grid) or grids_hidden,
        y_show_grid=bool(y_show_grid) or grids_hidden,
        x_show_labels=bool(x_show_grid) or (len(x_ticks) > 0 and grids_hidden),
        y_show_labels=bool(y_show_grid) or (len(y_ticks) > 0 and grids_hidden),
    )


def _is_finite(value: object) -> bool:
    try:
        return math.isfinite(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
