from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
import math
from typing import Callable

LOGGER = logging.getLogger(__name__)

FormatLabel = Callable[[float], str]


def default_format_label(value: float) -> str:
    v = _as_float(value)
    if v is None:
        return ""
    if v == 0:
        return "0"
    if v.is_integer() and abs(v) < 1e21:
        return str(int(v))
    text = repr(v)
    if "e" not in text:
        return text
    mantissa, exp = text.split("e")
    exponent = int(exp)
    # Positional from 1e-6 up to 1e21, unpadded signed exponent outside.
    if -7 < exponent < 21:
        return format(Decimal(text), "f")
    sign = "+" if exponent > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


def percent_format_label(value: float) -> str:
    v = _as_float(value)
    if v is None:
        return ""
    try:
        # Round the binary product, not the decimal text: 0.285 -> 28.499999999999996 -> "28%".
        q = Decimal(v * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ""
    out = format(q, "f")
    if out == "-0":
        out = "0"
    return f"{out}%"


def safe_formatter(fn: FormatLabel) -> FormatLabel:
    """Wrap `fn` so it never raises and never sees a non-finite value."""

    def _format(value: float) -> str:
        if _as_float(value) is None:
            return ""
        try:
            text = fn(value)
        except Exception:
            LOGGER.debug("label formatter failed for %r", value, exc_info=True)
            return ""
        return "" if text is None else str(text)

    return _format


def resolve_label_formatter(
    *,
    is_vertical: bool,
    show_in_percent: bool = False,
    custom: FormatLabel | None = None,
) -> FormatLabel:
    if custom is not None:
        return safe_formatter(custom)
    if is_vertical and show_in_percent:
        return safe_formatter(percent_format_label)
    return safe_formatter(default_format_label)


def _as_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        v = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(v):
        return None
    return v
