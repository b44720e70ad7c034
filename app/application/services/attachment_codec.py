"""Attachment field codec: persisted JSON text <-> AttachmentSet.

Single entry point for reading the attachment column. Legacy rows may hold
NULL, garbage, a JSON object, or an already-decoded list; every shape that
is not a JSON array of strings degrades to an empty set instead of failing.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from app.domain.value_objects.media import AssetReference, AttachmentSet

logger = logging.getLogger(__name__)


def _parse(raw: Any) -> Any:
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return None


def decode_attachments(raw: Any) -> AttachmentSet:
    """Decode a persisted attachment field. Never raises.

    Returns an empty set for None, unparseable JSON, or a non-array value.
    Non-string and blank members of an array are dropped.
    """
    if raw is None:
        return AttachmentSet.empty()
    parsed = _parse(raw)
    if not isinstance(parsed, list):
        logger.debug("Attachment field is not a JSON array; decoding as empty")
        return AttachmentSet.empty()
    references = tuple(
        AssetReference(item)
        for item in parsed
        if isinstance(item, str) and item.strip()
    )
    if len(references) != len(parsed):
        logger.debug(
            "Dropped %d non-string attachment entries",
            len(parsed) - len(references),
        )
    return AttachmentSet(references)


def encode_attachments(refs: AttachmentSet | Iterable[AssetReference]) -> str:
    """Serialize locators, in order, to a JSON array. Empty input gives "[]"."""
    return json.dumps([ref.locator for ref in refs])
