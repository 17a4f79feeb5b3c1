"""
LessonHub Backend — Static Image Lookup
=========================================

What:  Resolves `/images/{path}` requests to files inside IMAGES_DIR.
How:   Joins the requested path onto the resolved images directory and
       checks the result is still inside it (no `../` escapes) and is a
       regular file.

Misses are logged and raised as NotFoundError so the client receives an
explicit 404 instead of an empty body.
"""

import logging
from pathlib import Path
from typing import Optional

from lessonhub.config import settings
from lessonhub.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(self, images_dir: Optional[str] = None):
        """
        Args:
            images_dir: Override the default directory (used in tests).
                        If None, settings.images_dir is read on each lookup.
        """
        self._images_dir = images_dir

    @property
    def images_root(self) -> Path:
        return Path(self._images_dir or settings.images_dir).resolve()

    def resolve(self, file_path: str) -> Path:
        """
        Return the absolute path of an image under the images directory.

        Raises:
            ValidationError: The path escapes the images directory or
                cannot be resolved at all.
            NotFoundError: No regular file exists at that path.
        """
        root = self.images_root
        try:
            full_path = (root / file_path).resolve()
        except (ValueError, OSError):
            # e.g. an embedded NUL byte from a `%00` in the URL
            logger.warning("Rejected unresolvable image path: %r", file_path)
            raise ValidationError(message="Invalid file path", field="path")

        if not full_path.is_relative_to(root):
            logger.warning("Rejected image path outside images directory: %s", file_path)
            raise ValidationError(message="Invalid file path", field="path")

        if not full_path.is_file():
            logger.info("Image not found: %s", file_path)
            raise NotFoundError(resource="image", resource_id=file_path)

        return full_path


image_service = ImageService()
