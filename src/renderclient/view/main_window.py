"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the scene panel and the
rendered image.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (like File -> Save Image) and the
   controller's signals to the widgets that show them.
"""
from PySide6.QtWidgets import QMainWindow, QSplitter, QFileDialog, QMessageBox
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from renderclient.application import VISIBLE_APP_NAME
from renderclient.controller.session import RenderController
from renderclient.model.state import Phase
from renderclient.view.panels.scene_panel import ScenePanel
from renderclient.view.widgets.image_view import ImageView


class MainWindow(QMainWindow):
    def __init__(self, controller: RenderController) -> None:
        super().__init__()
        self.controller = controller

        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{controller.render_client.base_url}]")
        self.resize(1200, 750)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Scene Parameters ---
        self.scene_panel = ScenePanel(controller)
        splitter.addWidget(self.scene_panel)

        # --- RIGHT SIDE: Rendered Image ---
        self.image_view = ImageView()
        splitter.addWidget(self.image_view)

        # Set initial proportions (1 part sidebar : 3 parts image)
        splitter.setSizes([300, 900])

        # --- SIGNAL CONNECTIONS ---
        self.controller.image_changed.connect(self.on_image_changed)
        self.controller.image_cleared.connect(self.on_image_cleared)
        self.controller.error_reported.connect(self.on_error_reported)
        self.controller.phase_changed.connect(self.on_phase_changed)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self.statusBar().showMessage(str(Phase.IDLE))

    def _create_actions(self) -> None:
        self.act_save_image = QAction("Save Image...", self)
        self.act_save_image.setShortcut("Ctrl+S")
        self.act_save_image.triggered.connect(self.on_save_image)
        self.act_save_image.setEnabled(False)  # Disabled until an image exists

        self.act_clear_image = QAction("Clear Image", self)
        self.act_clear_image.triggered.connect(self.on_clear_image)
        self.act_clear_image.setEnabled(False)

        self.act_reset = QAction("Reset Parameters", self)
        self.act_reset.triggered.connect(self.on_reset)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_save_image)
        file_menu.addAction(self.act_clear_image)
        file_menu.addSeparator()
        file_menu.addAction(self.act_reset)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- SLOTS ---

    def on_image_changed(self, data: bytes) -> None:
        if self.image_view.set_image_bytes(data):
            self._update_image_actions()
        else:
            QMessageBox.warning(self, "Render", "The returned image could not be decoded as PNG.")

    def on_image_cleared(self) -> None:
        self.image_view.clear_image()
        self._update_image_actions()

    def on_clear_image(self) -> None:
        self.controller.clear_image()

    def on_reset(self) -> None:
        self.controller.reset_fields()

    def on_error_reported(self, message: str) -> None:
        QMessageBox.warning(self, "Render", message)

    def on_phase_changed(self, phase: str) -> None:
        self.statusBar().showMessage(phase)

    def on_save_image(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Save Image", "", "PNG Images (*.png)"
        )
        if fname:
            try:
                saved = self.controller.save_image(fname)
                self.statusBar().showMessage(f"Image saved to {saved}", 5000)
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Could not save image:\n{e}")

    def _update_image_actions(self) -> None:
        has_image = self.controller.has_image
        self.act_save_image.setEnabled(has_image)
        self.act_clear_image.setEnabled(has_image)

    def closeEvent(self, event, /) -> None:
        """Let a running request finish before the window goes away."""
        if self.controller.busy:
            self.statusBar().showMessage("Waiting for the render service to answer...")
            self.repaint()

        self.controller.shutdown()

        event.accept()
