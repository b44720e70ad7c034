"""Unit tests for the image transform pipeline (Pillow, no network)."""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from app.application.services.image_transformer import (
    ImageTransformer,
    TransformOptions,
    WatermarkOptions,
    composite_watermark,
    load_watermark,
)
from app.domain.enums import WatermarkCorner
from app.domain.exceptions import TransformError


def _open(data: bytes) -> Image.Image:
    img = Image.open(BytesIO(data))
    img.load()
    return img


def _mark(size: int = 10, color: tuple = (255, 0, 0, 128)) -> Image.Image:
    return Image.new("RGBA", (size, size), color)


def _pipeline(watermark: WatermarkOptions | None = None) -> ImageTransformer:
    return ImageTransformer(
        TransformOptions(max_width=900, max_height=600, watermark=watermark, output_format="PNG")
    )


class TestBounds:
    """Output fits the bounding box, keeps aspect ratio and never upscales."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            ((1800, 600), (900, 300)),
            ((600, 1200), (300, 600)),
            ((1800, 1200), (900, 600)),
            ((100, 50), (100, 50)),
            ((900, 600), (900, 600)),
        ],
    )
    def test_dimensions(
        self,
        transformer: ImageTransformer,
        make_image: Callable[..., bytes],
        size: tuple[int, int],
        expected: tuple[int, int],
    ) -> None:
        result = transformer.transform(make_image(*size))
        assert (result.width, result.height) == expected
        assert _open(result.data).size == expected

    def test_result_is_encoded_in_configured_format(
        self, transformer: ImageTransformer, make_image: Callable[..., bytes]
    ) -> None:
        result = transformer.transform(make_image(fmt="JPEG"))
        assert result.mime_type == "image/png"
        assert _open(result.data).format == "PNG"

    def test_jpeg_output_drops_alpha(self, make_image: Callable[..., bytes]) -> None:
        pipeline = ImageTransformer(
            TransformOptions(max_width=50, max_height=50, output_format="JPEG")
        )
        result = pipeline.transform(make_image(mode="RGBA", color=(0, 0, 255, 100)))
        assert result.mime_type == "image/jpeg"
        assert _open(result.data).mode == "RGB"


class TestWatermark:
    """Watermark opacity, placement and overflow."""

    def test_full_opacity_preserves_mark_alpha(self, make_image: Callable[..., bytes]) -> None:
        """A half-transparent red mark over a transparent base lands with alpha 128."""
        pipeline = _pipeline(WatermarkOptions(image=_mark(), opacity=1.0))
        base = make_image(100, 100, mode="RGBA", color=(0, 0, 0, 0))
        out = _open(pipeline.transform(base).data).convert("RGBA")
        assert out.getpixel((95, 95)) == (255, 0, 0, 128)
        assert out.getpixel((5, 5)) == (0, 0, 0, 0)

    def test_half_opacity_scales_mark_alpha(self, make_image: Callable[..., bytes]) -> None:
        pipeline = _pipeline(WatermarkOptions(image=_mark(), opacity=0.5))
        base = make_image(100, 100, mode="RGBA", color=(0, 0, 0, 0))
        out = _open(pipeline.transform(base).data).convert("RGBA")
        assert out.getpixel((95, 95))[3] == 64

    def test_zero_opacity_matches_no_watermark(self, make_image: Callable[..., bytes]) -> None:
        base = make_image(100, 80)
        plain = _open(_pipeline().transform(base).data)
        marked = _open(_pipeline(WatermarkOptions(image=_mark(), opacity=0.0)).transform(base).data)
        assert plain.convert("RGB").tobytes() == marked.convert("RGB").tobytes()

    @pytest.mark.parametrize(
        ("corner", "inside", "outside"),
        [
            (WatermarkCorner.NORTHWEST, (2, 2), (97, 97)),
            (WatermarkCorner.NORTHEAST, (97, 2), (2, 97)),
            (WatermarkCorner.SOUTHWEST, (2, 97), (97, 2)),
            (WatermarkCorner.SOUTHEAST, (97, 97), (2, 2)),
        ],
    )
    def test_corner_placement(
        self, corner: WatermarkCorner, inside: tuple[int, int], outside: tuple[int, int]
    ) -> None:
        base = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        options = WatermarkOptions(image=_mark(color=(0, 255, 0, 255)), corner=corner)
        out = composite_watermark(base, options)
        assert out.getpixel(inside) == (0, 255, 0, 255)
        assert out.getpixel(outside) == (0, 0, 0, 0)

    def test_margins_offset_the_mark(self) -> None:
        base = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        options = WatermarkOptions(
            image=_mark(color=(0, 255, 0, 255)), margin_x=20, margin_y=30
        )
        out = composite_watermark(base, options)
        assert out.getpixel((75, 65)) == (0, 255, 0, 255)
        assert out.getpixel((95, 95)) == (0, 0, 0, 0)

    def test_oversized_mark_is_clipped_not_skipped(self) -> None:
        """A mark larger than the canvas still covers the part that overlaps."""
        base = Image.new("RGBA", (20, 20), (0, 0, 0, 0))
        options = WatermarkOptions(image=_mark(size=50, color=(0, 0, 255, 255)))
        out = composite_watermark(base, options)
        assert out.size == (20, 20)
        assert out.getpixel((0, 0)) == (0, 0, 255, 255)
        assert out.getpixel((19, 19)) == (0, 0, 255, 255)


class TestFailures:
    """Every decode failure surfaces as TransformError."""

    def test_empty_payload(self, transformer: ImageTransformer) -> None:
        with pytest.raises(TransformError) as exc_info:
            transformer.transform(b"", "empty.png")
        assert exc_info.value.reason == "empty payload"
        assert exc_info.value.filename == "empty.png"

    def test_corrupt_payload(self, transformer: ImageTransformer) -> None:
        with pytest.raises(TransformError, match="unsupported or corrupt"):
            transformer.transform(b"definitely not an image", "notes.txt")



def test_load_watermark_converts_to_rgba(tmp_path: Path) -> None:
    path = tmp_path / "mark.png"
    Image.new("RGB", (8, 8), (10, 20, 30)).save(path)
    mark = load_watermark(path)
    assert mark.mode == "RGBA"
    assert mark.size == (8, 8)


def test_load_watermark_missing_file_raises_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Watermark image could not be loaded"):
        load_watermark(tmp_path / "missing.png")
