"""Application services: attachment codec, identifier extractor, image transform, lifecycle reconciler."""

from app.application.services.attachment_codec import (
    decode_attachments,
    encode_attachments,
)
from app.application.services.identifier_extractor import extract_identifier
from app.application.services.image_transformer import (
    ImageTransformer,
    TransformOptions,
    WatermarkOptions,
    composite_watermark,
    load_watermark,
)
from app.application.services.lifecycle_reconciler import LifecycleReconciler

__all__ = [
    "ImageTransformer",
    "LifecycleReconciler",
    "TransformOptions",
    "WatermarkOptions",
    "composite_watermark",
    "decode_attachments",
    "encode_attachments",
    "extract_identifier",
    "load_watermark",
]
