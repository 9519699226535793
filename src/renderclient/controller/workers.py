"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for the two network calls.

Why is this file needed?
------------------------
1. Responsiveness: A blocking HTTP request on the main thread freezes the
   GUI. These classes push each call to a background thread.
2. Signals: Results travel back to the controller through Qt Signals, so all
   state changes still happen on the GUI thread.

Classes:
    CatalogWorker: Fetches the scenario catalog once.
    RenderWorker: Sends one render request and awaits the image.
"""
import logging
from PySide6.QtCore import QThread, Signal

from renderclient.controller.clients import CatalogClient, CatalogError, RenderClient
from renderclient.model.geometry import RenderRequest
from renderclient.model.results import RenderResult

logger = logging.getLogger(__name__)


class CatalogWorker(QThread):
    catalog_loaded = Signal(list)
    catalog_failed = Signal(str)

    def __init__(self, client: CatalogClient):
        super().__init__()
        self.client = client

    def run(self):
        try:
            values = self.client.fetch()
        except CatalogError as e:
            logger.error(f"Error in CatalogWorker: {e}")
            self.catalog_failed.emit(str(e))
            return
        self.catalog_loaded.emit(values)


class RenderWorker(QThread):
    render_finished = Signal(object)  # RenderResult

    def __init__(self, client: RenderClient, scenario_id: str, request: RenderRequest):
        super().__init__()
        self.client = client
        self.scenario_id = scenario_id
        self.request = request

    def run(self):
        try:
            result = self.client.render(self.scenario_id, self.request)
        except Exception as e:
            # RenderClient folds its own errors; anything else is a bug
            logger.exception(f"Error in RenderWorker: {e}")
            result = RenderResult.failure(f"Unexpected error: {e}")
        self.render_finished.emit(result)
