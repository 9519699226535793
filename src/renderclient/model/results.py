"""
Render Results & Presentation Sink
==================================
`RenderResult` is what one submission produces; `PresentationSink` is the
single place that turns results into something an image surface can show.

Classes:
    RenderResult: Decoded image, or a human-readable failure message.
    PresentationSink: Holds the currently displayed image and last error.
"""
from __future__ import annotations

import base64
import binascii
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

PNG_MEDIA_TYPE = "image/png"


@dataclass(frozen=True)
class RenderResult:
    image: Optional[bytes] = None
    encoded: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, encoded: str) -> RenderResult:
        """
        Build a successful result from the base64 text sent by the server.

        Raises:
            ValueError: if `encoded` is not valid base64.
        """
        try:
            image = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Image is not valid base64: {e}") from e
        if not image:
            raise ValueError("Image is empty.")
        return cls(image=image, encoded=encoded)

    @classmethod
    def failure(cls, message: str) -> RenderResult:
        return cls(error=message or "Unknown render error.")


class PresentationSink:
    """
    Display-side state of the last render.

    A successful result replaces the image; a failed one sets `error` and
    leaves the previous image on screen.
    """

    def __init__(self, media_type: str = PNG_MEDIA_TYPE) -> None:
        self.media_type = media_type
        self.image_bytes: Optional[bytes] = None
        self.image_source: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return self.image_bytes is not None

    def present(self, result: RenderResult) -> bool:
        """Show `result`. Returns True if an image is now displayed from it."""
        if not result.ok:
            self.error = result.error
            logger.warning(f"Render failed: {result.error}")
            return False

        self.image_bytes = result.image
        self.image_source = f"data:{self.media_type};base64,{result.encoded}"
        self.error = None
        logger.info(f"Displaying image ({len(result.image)} bytes).")
        return True

    def clear(self) -> None:
        self.image_bytes = None
        self.image_source = None
        self.error = None

    def save(self, filepath: str) -> str:
        """
        Write the displayed image to `filepath` (".png" appended if missing).

        Raises:
            ValueError: if no image is displayed.
        """
        if self.image_bytes is None:
            raise ValueError("There is no rendered image to save.")

        if not os.path.splitext(filepath)[1]:
            filepath += ".png"

        with open(filepath, "wb") as f:
            f.write(self.image_bytes)
        logger.info(f"Image saved to: {filepath}")
        return filepath
