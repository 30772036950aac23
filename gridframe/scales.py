from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Protocol, Sequence

import numpy as np


DOMAIN_PAD_RATIO = 0.05


class Scale(Protocol):
    def domain(self) -> tuple[float, float]:
        ...

    def scale(self, value: float) -> float | None:
        ...


@dataclass(frozen=True)
class LinearScale:
    """Affine map from a data-space domain onto a pixel range.

    `scale` returns None when the input is not finite or the domain is
    degenerate, so callers can treat the scale as "not ready".
    """

    domain_min: float
    domain_max: float
    range_start: float
    range_end: float

    @classmethod
    def from_bounds(cls, domain: Sequence[float], range_px: Sequence[float]) -> "LinearScale":
        if len(domain) != 2 or len(range_px) != 2:
            raise ValueError("domain and range must have exactly two bounds")
        return cls(
            domain_min=float(domain[0]),
            domain_max=float(domain[1]),
            range_start=float(range_px[0]),
            range_end=float(range_px[1]),
        )

    def domain(self) -> tuple[float, float]:
        return (self.domain_min, self.domain_max)

    def scale(self, value: float) -> float | None:
        try:
            v = float(value)
        except (TypeError, ValueError):
            return None
        span = self.domain_max - self.domain_min
        if not math.isfinite(v) or span == 0 or not math.isfinite(span):
            return None
        t = (v - self.domain_min) / span
        return self.range_start + t * (self.range_end - self.range_start)

    def scale_many(self, values: Sequence[float]) -> np.ndarray:
        """Vectorised `scale`; unprojectable values come back as NaN."""
        arr = np.asarray(values, dtype=np.float64)
        span = self.domain_max - self.domain_min
        if span == 0 or not math.isfinite(span):
            return np.full(arr.shape, np.nan, dtype=np.float64)
        out = self.range_start + (arr - self.domain_min) / span * (self.range_end - self.range_start)
        out[~np.isfinite(arr)] = np.nan
        return out


def domain_bounds(domain: Sequence[float]) -> tuple[float, float]:
    lo = float(min(domain))
    hi = float(max(domain))
    return (lo, hi)


def is_in_domain(value: float, domain: Sequence[float]) -> bool:
    if len(domain) == 0:
        return False
    lo, hi = domain_bounds(domain)
    return lo <= value <= hi


def padded_limits(vmin: float, vmax: float, buffer_ratio: float = DOMAIN_PAD_RATIO) -> tuple[float, float]:
    if vmin == vmax:
        delta = max(1.0, abs(vmin) * buffer_ratio)
        return (vmin - delta, vmax + delta)
    pad = (vmax - vmin) * buffer_ratio
    return (vmin - pad, vmax + pad)


def nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Round-number tick candidates covering [vmin, vmax].

    Only a convenience for callers building candidate sets; the layout engine
    itself never generates ticks.
    """
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)
    lo, hi = (vmin, vmax) if vmin < vmax else (vmax, vmin)

    span = _nice_number(hi - lo, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.ceil(lo / step) * step
    tick_max = np.floor(hi / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Snap float drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))
