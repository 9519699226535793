"""
Render Session Controller
=========================
The single owner of `AppState`. Views call into it; it answers through
Qt Signals.

Why is this file needed?
------------------------
1. Sequencing: A submission runs Validate -> Build -> Send -> Await ->
   Present, each step an explicit transition of the SubmissionMachine.
2. Serialisation: A new submission is only accepted from the Idle phase, so
   rapid repeated clicks never put two renders in flight.
3. Testability: Worker start-up is injectable; tests run workers inline.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from PySide6.QtCore import QObject, QThread, Signal

from renderclient import config
from renderclient.controller.clients import CatalogClient, RenderClient
from renderclient.controller.workers import CatalogWorker, RenderWorker
from renderclient.model.fields import FIELD_KEYS, FieldReading, ValidationError, read_fields, read_number
from renderclient.model.geometry import RenderRequest, build_request, validate_pose
from renderclient.model.results import PresentationSink, RenderResult
from renderclient.model.state import AppState, Event

logger = logging.getLogger(__name__)


class RenderController(QObject):
    catalog_changed = Signal(list)
    phase_changed = Signal(str)
    fields_reset = Signal()
    image_changed = Signal(object)  # PNG bytes
    image_cleared = Signal()
    error_reported = Signal(str)

    def __init__(
        self,
        state: Optional[AppState] = None,
        catalog_client: Optional[CatalogClient] = None,
        render_client: Optional[RenderClient] = None,
        sink: Optional[PresentationSink] = None,
        start_worker: Optional[Callable[[QThread], None]] = None,
    ) -> None:
        super().__init__()
        self.state = state or AppState()
        self.catalog_client = catalog_client or CatalogClient()
        self.render_client = render_client or RenderClient()
        self.sink = sink or PresentationSink(media_type=config.IMAGE_MEDIA_TYPE)
        self._start_worker = start_worker or self._start_thread

        self._workers: set[QThread] = set()
        self._catalog_requested = False

    # --- WORKERS ---

    def _start_thread(self, worker: QThread) -> None:
        # Keep a reference until the thread is done, or Qt destroys it mid-run
        self._workers.add(worker)
        worker.finished.connect(self._on_worker_finished)
        worker.start()

    def _on_worker_finished(self) -> None:
        # Queued onto the GUI thread; sender() is the QThread that just stopped
        worker = self.sender()
        self._workers.discard(worker)
        if worker is not None:
            worker.deleteLater()

    def shutdown(self) -> None:
        """
        Block until every running worker has returned.

        Requests cannot be cancelled and have no timeout, so this waits for
        the render service to answer. Qt aborts the process if a QThread is
        destroyed while still running.
        """
        running = [w for w in self._workers if w.isRunning()]
        if running:
            logger.info(f"Waiting for {len(running)} background request(s) to finish...")
        for worker in running:
            worker.wait()

    def _fire(self, event: Event) -> None:
        before = self.state.phase
        after = self.state.machine.fire(event)
        if after != before:
            self.phase_changed.emit(str(after))

    # --- CATALOG ---

    def load_catalog(self) -> None:
        """Fetch the scenario list. Only the first call does anything."""
        if self._catalog_requested:
            logger.warning("Scenario catalog was already requested; ignoring.")
            return
        self._catalog_requested = True

        worker = CatalogWorker(self.catalog_client)
        worker.catalog_loaded.connect(self.on_catalog_loaded)
        worker.catalog_failed.connect(self.on_catalog_failed)
        self._start_worker(worker)

    def on_catalog_loaded(self, values: list) -> None:
        self.state.set_catalog(values)
        self._fire(Event.CATALOG_LOADED)
        self.catalog_changed.emit(list(self.state.catalog))

    def on_catalog_failed(self, message: str) -> None:
        logger.error(f"Scenario catalog unavailable: {message}")
        self.state.set_catalog([])
        self.catalog_changed.emit([])

    # --- PARAMETERS ---

    def set_field(self, key: str, text: str) -> FieldReading:
        if key not in FIELD_KEYS:
            raise KeyError(f"Unknown field '{key}'.")
        self.state.fields[key] = text
        self._fire(Event.FIELD_CHANGED)
        return read_number(text)

    def select_scenario(self, name: str) -> None:
        if name not in self.state.catalog:
            raise ValueError(f"Scenario '{name}' is not in the catalog.")
        self.state.selected_scenario = name

    def reset_fields(self) -> None:
        self.state.reset_fields()
        self._fire(Event.FIELD_CHANGED)
        self.fields_reset.emit()

    # --- SUBMISSION ---

    @property
    def busy(self) -> bool:
        return self.state.machine.in_flight

    def can_submit(self) -> bool:
        return self.state.machine.is_idle and self.state.selected_scenario is not None

    def _validate(self) -> Tuple[str, RenderRequest]:
        problems = []

        scenario = self.state.selected_scenario
        if not scenario:
            problems.append("scenario: no scenario selected")

        try:
            values = read_fields(self.state.fields)
            validate_pose(values)
        except ValidationError as e:
            problems.extend(e.problems)

        if problems:
            raise ValidationError(problems)
        return scenario, build_request(values)

    def submit(self) -> bool:
        """
        Start one render cycle. Returns True if a request was sent.
        """
        if not self.state.machine.accepts(Event.SUBMIT_CLICKED):
            logger.warning(f"Render already in progress ({self.state.phase}); ignoring submit.")
            return False

        self._fire(Event.SUBMIT_CLICKED)
        try:
            scenario, request = self._validate()
        except ValidationError as e:
            self._fire(Event.VALIDATION_FAILED)
            logger.warning(f"Submission rejected: {e}")
            self.error_reported.emit("Cannot render:\n" + "\n".join(f"- {p}" for p in e.problems))
            self._fire(Event.SETTLED)
            return False
        self._fire(Event.VALIDATION_PASSED)

        worker = RenderWorker(self.render_client, scenario, request)
        worker.render_finished.connect(self.on_render_finished)
        self._fire(Event.REQUEST_SENT)
        self._start_worker(worker)
        return True

    def on_render_finished(self, result: RenderResult) -> None:
        self.state.last_result = result

        if result.ok:
            self._fire(Event.RENDER_COMPLETED)
            self.sink.present(result)
            self._fire(Event.RESULT_SHOWN)
            self.image_changed.emit(result.image)
        else:
            self._fire(Event.RENDER_FAILED)
            self.sink.present(result)
            self._fire(Event.RESULT_SHOWN)
            self.error_reported.emit(result.error)

        self._fire(Event.SETTLED)

    # --- OUTPUT ---

    @property
    def has_image(self) -> bool:
        return self.sink.has_image

    def clear_image(self) -> None:
        self.sink.clear()
        self.image_cleared.emit()

    def save_image(self, filepath: str) -> str:
        return self.sink.save(filepath)
