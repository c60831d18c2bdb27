"""Entry point: `python app.py` (development server) or `flask --app app run`."""

import importlib
import logging
import signal
import sys

from config import get_settings_module

from src.user_directory.user_directory.main import EXTENSION_KEY, create_app

app = create_app()


def _exit_on_sigterm(signum, frame):
    sys.exit(0)


if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    signal.signal(signal.SIGTERM, _exit_on_sigterm)
    try:
        app.run(host=settings.HOST, port=settings.PORT, debug=app.config["DEBUG"], use_reloader=False)
    finally:
        app.extensions[EXTENSION_KEY].close()
        logging.getLogger(__name__).info("Server stopped; connection pool released")
