from __future__ import annotations


class FrameConfigError(ValueError):
    """Raised when frame inputs are invalid at construction time."""
