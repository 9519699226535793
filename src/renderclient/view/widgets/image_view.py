"""
Rendered Image Surface
"""
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QLabel, QSizePolicy


class ImageView(QLabel):
    """A label that scales the rendered image to fill available space, maintaining aspect ratio."""

    PLACEHOLDER = "No image rendered yet."

    def __init__(self, parent=None):
        super().__init__(parent)
        self._original_pixmap: Optional[QPixmap] = None
        self.setAlignment(Qt.AlignCenter)
        # Ignored size policy allows the label to shrink/grow freely based on layout
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(1, 1)
        self.setStyleSheet("background-color: #202020; color: gray;")
        self.setText(self.PLACEHOLDER)

    def set_image_bytes(self, data: bytes) -> bool:
        """Replace the shown image. Returns False if Qt cannot decode the bytes."""
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            return False
        self._original_pixmap = pixmap
        self._update_display()
        return True

    def clear_image(self) -> None:
        self._original_pixmap = None
        self.clear()
        self.setText(self.PLACEHOLDER)

    def resizeEvent(self, event):
        if self._original_pixmap:
            self._update_display()
        super().resizeEvent(event)

    def _update_display(self):
        if self._original_pixmap and not self._original_pixmap.isNull():
            scaled = self._original_pixmap.scaled(
                self.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation
            )
            super().setPixmap(scaled)
