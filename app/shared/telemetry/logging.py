"""Logging configuration for the application."""

import logging
import sys

from app.core.config import get_settings


def setup_logging() -> None:
    """Configure root logging once: DEBUG when settings.debug, else INFO, to stdout.

    Noisy client libraries are held at WARNING so per-upload request lines
    do not drown the media lifecycle messages.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in ("cloudinary", "urllib3", "PIL"):
        logging.getLogger(name).setLevel(logging.WARNING)
