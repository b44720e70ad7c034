"""Derive a media store identifier from a persisted locator.

Only locators are stored with records, so deletes need the identifier
recovered from the URL. Pure and total over strings: it runs during delete
reconciliation, where nothing may block the metadata mutation.

Supported shapes:
    .../upload/<version>/<identifier>.<ext>
    .../upload/<folder>/<identifier>.<ext>    -> "<folder>/<identifier>"
    .../<identifier>.<ext>                    (fallback: final segment)
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

UPLOAD_SEGMENT = "upload"
_VERSION_RE = re.compile(r"^v\d+$")


def _strip_extension(segment: str) -> str:
    dot = segment.find(".")
    return segment if dot == -1 else segment[:dot]


def extract_identifier(locator: str) -> str | None:
    """Return the store identifier for locator, or None when it cannot be derived.

    None is returned when the locator has no "/" at all or when nothing is
    left after removing the extension.
    """
    if not locator or "/" not in locator:
        return None
    path = urlsplit(locator).path if "://" in locator else locator
    segments = [s for s in path.split("/") if s]
    if not segments:
        return None

    if UPLOAD_SEGMENT in segments:
        tail = segments[segments.index(UPLOAD_SEGMENT) + 1 :]
        if len(tail) > 1 and _VERSION_RE.match(tail[0]):
            tail = tail[1:]
        if not tail:
            return None
    else:
        tail = segments[-1:]

    identifier = "/".join(tail[:-1] + [_strip_extension(tail[-1])])
    if not identifier or identifier.endswith("/"):
        return None
    return identifier
