"""Image transform pipeline: bounded resize, translucent watermark, format normalization.

Pure over bytes (no network or persistence). CPU-bound; callers run it in a
worker thread. Every decode/resize/composite/encode failure surfaces as
TransformError for that one file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from app.application.dtos.media import TransformResult
from app.domain.enums import WatermarkCorner
from app.domain.exceptions import TransformError

logger = logging.getLogger(__name__)

_MIME_TYPES = {
    "WEBP": "image/webp",
    "PNG": "image/png",
    "JPEG": "image/jpeg",
}
_ALPHA_FORMATS = frozenset({"WEBP", "PNG"})


@dataclass(frozen=True)
class WatermarkOptions:
    """Watermark image (RGBA) and how to place it."""

    image: Image.Image
    opacity: float = 1.0
    corner: WatermarkCorner = WatermarkCorner.SOUTHEAST
    margin_x: int = 0
    margin_y: int = 0


@dataclass(frozen=True)
class TransformOptions:
    """Bounds, optional watermark and output encoding for one pipeline."""

    max_width: int
    max_height: int
    watermark: WatermarkOptions | None = None
    output_format: str = "WEBP"
    quality: int = 85

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self.output_format.upper()]


def load_watermark(path: str | Path) -> Image.Image:
    """Load the watermark asset as RGBA. Raises ValueError if missing or unreadable.

    Called once at startup; a bad watermark is a configuration error, not a
    per-file TransformError.
    """
    try:
        with Image.open(path) as wm:
            return wm.convert("RGBA")
    except (OSError, UnidentifiedImageError) as e:
        raise ValueError(f"Watermark image could not be loaded from {path}: {e}") from e


def _attenuate(watermark: Image.Image, opacity: float) -> Image.Image:
    """Multiply the watermark's own alpha channel by opacity (0..1)."""
    if opacity >= 1.0:
        return watermark
    faded = watermark.copy()
    alpha = faded.getchannel("A").point(lambda a: round(a * opacity))
    faded.putalpha(alpha)
    return faded


def _anchor(
    canvas: tuple[int, int],
    mark: tuple[int, int],
    corner: WatermarkCorner,
    margin_x: int,
    margin_y: int,
) -> tuple[int, int]:
    """Top-left position of the mark. May be negative when the mark overflows."""
    cw, ch = canvas
    mw, mh = mark
    west = corner in (WatermarkCorner.NORTHWEST, WatermarkCorner.SOUTHWEST)
    north = corner in (WatermarkCorner.NORTHWEST, WatermarkCorner.NORTHEAST)
    x = margin_x if west else cw - mw - margin_x
    y = margin_y if north else ch - mh - margin_y
    return x, y


def composite_watermark(base: Image.Image, options: WatermarkOptions) -> Image.Image:
    """Overlay the attenuated watermark at its corner. Returns an RGBA image.

    A mark larger than the canvas (or pushed off it by margins) overflows and
    is clipped to the canvas; it is never skipped.
    """
    canvas = base.convert("RGBA")
    mark = _attenuate(options.image, options.opacity)
    position = _anchor(
        canvas.size, mark.size, options.corner, options.margin_x, options.margin_y
    )
    if (
        position[0] < 0
        or position[1] < 0
        or position[0] + mark.width > canvas.width
        or position[1] + mark.height > canvas.height
    ):
        logger.debug(
            "Watermark %sx%s overflows %sx%s canvas at %s; clipping",
            mark.width,
            mark.height,
            canvas.width,
            canvas.height,
            position,
        )
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    layer.paste(mark, position)
    return Image.alpha_composite(canvas, layer)


def _has_alpha(img: Image.Image) -> bool:
    return "A" in img.getbands() or "transparency" in img.info


class ImageTransformer:
    """Runs the resize -> watermark -> encode pipeline with fixed options."""

    def __init__(self, options: TransformOptions) -> None:
        self.options = options

    def _decode(self, raw: bytes) -> Image.Image:
        if not raw:
            raise TransformError("empty payload")
        try:
            with Image.open(BytesIO(raw)) as img:
                img.load()
                decoded = ImageOps.exif_transpose(img)
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise TransformError(f"unsupported or corrupt image: {e}") from e
        except (OSError, ValueError, SyntaxError) as e:
            raise TransformError(f"image decode failed: {e}") from e
        return decoded

    def transform(self, raw: bytes, filename: str | None = None) -> TransformResult:
        """Transform one raw image. Raises TransformError; never returns partial output."""
        opts = self.options
        try:
            img = self._decode(raw)
            keep_alpha = _has_alpha(img) and opts.output_format.upper() in _ALPHA_FORMATS
            img = img.convert("RGBA" if _has_alpha(img) else "RGB")
            # thumbnail() fits inside the box, keeps aspect ratio and never upscales.
            img.thumbnail((opts.max_width, opts.max_height), Image.Resampling.LANCZOS)
            if opts.watermark is not None:
                img = composite_watermark(img, opts.watermark)
            img = img.convert("RGBA" if keep_alpha else "RGB")
            out = BytesIO()
            img.save(out, format=opts.output_format.upper(), quality=opts.quality)
        except TransformError as e:
            if filename and e.filename is None:
                raise TransformError(e.reason, filename) from e
            raise
        except (OSError, ValueError, MemoryError) as e:
            raise TransformError(f"image processing failed: {e}", filename) from e
        return TransformResult(
            data=out.getvalue(),
            width=img.width,
            height=img.height,
            mime_type=opts.mime_type,
        )
