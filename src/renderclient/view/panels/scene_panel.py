"""
Scene Parameters Control Panel
"""
from typing import Dict

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout, QComboBox, QLineEdit
)
from PySide6.QtCore import Qt

from renderclient.controller.session import RenderController
from renderclient.model.fields import AXES, CAMERA_FROM, CAMERA_TO, CAMERA_UP, LIGHT, field_key, read_number
from renderclient.model.state import Phase

GROUP_TITLES = {
    LIGHT: "Light Position",
    CAMERA_FROM: "Camera From",
    CAMERA_TO: "Camera To",
    CAMERA_UP: "Camera Up",
}

INVALID_STYLE = "border: 1px solid red; background-color: #ffecec;"


class ScenePanel(QWidget):
    def __init__(self, controller: RenderController) -> None:
        super().__init__()
        self.controller = controller
        self.state = controller.state
        self.edits: Dict[str, QLineEdit] = {}

        layout = QVBoxLayout(self)

        # --- Scenario Group ---
        grp = QGroupBox("Scenario")
        form = QFormLayout(grp)
        self.scenario_combo = QComboBox()
        self.scenario_combo.setPlaceholderText("Loading scenarios...")
        self.scenario_combo.currentTextChanged.connect(self.on_scenario_changed)
        form.addRow("Scene:", self.scenario_combo)
        layout.addWidget(grp)

        # --- Vector Groups ---
        for role, title in GROUP_TITLES.items():
            grp = QGroupBox(title)
            form = QFormLayout(grp)
            for axis in AXES:
                key = field_key(role, axis)
                edit = QLineEdit()
                edit.textEdited.connect(lambda text, k=key: self.on_field_edited(k, text))
                self.edits[key] = edit
                form.addRow(f"{axis.upper()}:", edit)
            layout.addWidget(grp)

        # --- Actions ---
        self.btn_render = QPushButton("Render")
        self.btn_render.setMinimumHeight(40)
        self.btn_render.clicked.connect(self.on_render_clicked)
        layout.addWidget(self.btn_render)

        # --- Status Info ---
        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_status)

        layout.addStretch()

        # --- SIGNAL CONNECTIONS ---
        self.controller.catalog_changed.connect(self.on_catalog_changed)
        self.controller.phase_changed.connect(self.on_phase_changed)
        self.controller.fields_reset.connect(self.load_from_state)

        self.load_from_state()
        self.update_render_button()

    # --- SLOTS ---

    def on_render_clicked(self) -> None:
        self.controller.submit()

    def on_field_edited(self, key: str, text: str) -> None:
        reading = self.controller.set_field(key, text)
        self._mark(key, reading.ok, reading.error)

    def on_scenario_changed(self, name: str) -> None:
        if name:
            self.controller.select_scenario(name)
        self.update_render_button()

    def on_catalog_changed(self, values: list) -> None:
        self.scenario_combo.blockSignals(True)
        try:
            self.scenario_combo.clear()
            self.scenario_combo.addItems(values)
            if self.state.selected_scenario:
                self.scenario_combo.setCurrentText(self.state.selected_scenario)
        finally:
            self.scenario_combo.blockSignals(False)

        if values:
            self._set_status_styled("", "gray")
        else:
            self.scenario_combo.setPlaceholderText("No scenarios available")
            self._set_status_styled("Render service unavailable: no scenarios.", "red", bold=True)
        self.update_render_button()

    def on_phase_changed(self, phase: str) -> None:
        if phase in (Phase.SUBMITTING, Phase.AWAITING):
            self._set_status_styled("Rendering...", "orange", bold=True)
        elif phase == Phase.DISPLAYING:
            self._set_status_styled("Done ✓", "green", bold=True)
        elif phase in (Phase.INVALID, Phase.REPORTING_ERROR):
            self._set_status_styled("Failed", "red")
        self.update_render_button()

    # --- HELPERS ---

    def load_from_state(self) -> None:
        """Force the line edits to show the texts held in the state."""
        for key, edit in self.edits.items():
            text = self.state.fields.get(key, "")
            edit.setText(text)
            reading = read_number(text)
            self._mark(key, reading.ok, reading.error)

    def update_render_button(self) -> None:
        self.btn_render.setEnabled(self.controller.can_submit())

    def _mark(self, key: str, ok: bool, error: str | None) -> None:
        edit = self.edits[key]
        edit.setStyleSheet("" if ok else INVALID_STYLE)
        edit.setToolTip("" if ok else error)

    def _set_status_styled(self, text: str, color: str, bold: bool = False) -> None:
        self.lbl_status.setText(text)
        weight = "bold" if bold else "normal"
        self.lbl_status.setStyleSheet(f"color: {color}; font-weight: {weight};")
