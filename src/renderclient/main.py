"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Application State (AppState).
2. Instantiates the Controller with its HTTP clients.
3. Instantiates the Main Window (View) and passes the Controller into it.
4. Requests the scenario catalog once the window is up.
"""
import logging
import sys

from renderclient import config
from renderclient.application import create_app
from renderclient.controller.clients import CatalogClient, RenderClient
from renderclient.controller.session import RenderController
from renderclient.logging_config import setup_logging
from renderclient.model.state import AppState
from renderclient.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.INFO, log_file=config.LOG_FILE)
    logger.info(f"Render service: {config.SERVER_URL}")

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the State and Controller
    state = AppState()
    controller = RenderController(
        state,
        catalog_client=CatalogClient(config.SERVER_URL),
        render_client=RenderClient(config.SERVER_URL),
    )

    # 4. Initialize the Main Window, passing the controller
    window = MainWindow(controller)
    window.show()

    # 5. Populate the scenario list (runs in the background)
    controller.load_catalog()

    # 6. Running QThreads must not outlive the event loop
    app.aboutToQuit.connect(controller.shutdown)

    # 7. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
