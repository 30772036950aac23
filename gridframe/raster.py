from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont


RGBA = tuple[int, int, int, int]

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "liberationsans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.empty((max(0, height), max(0, width), 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def _blend_segment(segment: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    src = np.asarray(color[:3], dtype=np.float32)
    segment[..., :3] = (src * a + segment[..., :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    segment[..., 3] = np.maximum(segment[..., 3], color[3])


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    for yy in range(y, y + max(1, width)):
        if yy < 0 or yy >= dst.shape[0]:
            continue
        xa = max(0, min(x0, x1))
        xb = min(dst.shape[1] - 1, max(x0, x1))
        if xa > xb:
            continue
        _blend_segment(dst[yy, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    for xx in range(x, x + max(1, width)):
        if xx < 0 or xx >= dst.shape[1]:
            continue
        ya = max(0, min(y0, y1))
        yb = min(dst.shape[0] - 1, max(y0, y1))
        if ya > yb:
            continue
        _blend_segment(dst[ya : yb + 1, xx], color)


def draw_segment(dst: np.ndarray, x1: float, y1: float, x2: float, y2: float, color: RGBA, width: int = 1) -> None:
    """Axis-aligned segment; anything else is ignored."""
    ix1, iy1, ix2, iy2 = (int(round(v)) for v in (x1, y1, x2, y2))
    if ix1 == ix2:
        draw_vline(dst, ix1, iy1, iy2, color, width)
    elif iy1 == iy2:
        draw_hline(dst, ix1, ix2, iy1, color, width)


def quarter_turns(rotate_deg: int) -> int:
    """Counter-clockwise quarter turns for a clockwise-positive angle."""
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (-rotate_deg // 90) % 4


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> tuple[int, int]:
    font = load_font(font_family, font_size_px)
    if not text:
        return (0, 0)
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    if quarter_turns(rotate_deg) % 2 == 1:
        return (h, w)
    return (w, h)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> None:
    """Paint `text` with its (rotated) bounding box's top-left corner at (x, y)."""
    if not text:
        return
    mask = _render_mask(text, load_font(font_family, font_size_px))
    turns = quarter_turns(rotate_deg)
    if turns:
        mask = np.rot90(mask, k=turns)
    _blend_mask(dst, x, y, mask, color)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    alpha = (color[3] / 255.0) * cov
    patch = dst[y0:y1, x0:x1]
    src = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    patch[:, :, :3] = np.clip(src * alpha[:, :, None] + patch[:, :, :3] * (1.0 - alpha[:, :, None]), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.maximum(patch[:, :, 3], np.clip(alpha * 255.0, 0, 255).astype(np.uint8))


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=32)
def load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    path = _resolve_font_path(font_family)
    if path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(path), size=size)
    except OSError:
        return ImageFont.load_default()


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() or DEFAULT_FONT_FAMILY.lower()
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if base.exists():
            for ext in ("*.ttf", "*.otf"):
                candidates.extend(sorted(base.rglob(ext)))
    for pattern in (wanted,) + FONT_FALLBACK_PATTERNS:
        p = pattern.replace(" ", "")
        for path in candidates:
            if p == path.stem.lower().replace(" ", "").replace("-", ""):
                return path
    return None
