"""Application entry point for the UIGen backend server."""

from uigen.app import App
from uigen.config import Config
from uigen.logging import setup_logging
from uigen.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
