"""Entry point for the storefront Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from storefront.config import DEBUG_LOG_PATH
from storefront.storefront_app import StorefrontApp


def configure_logging(log_path: str = DEBUG_LOG_PATH) -> None:
    """Send log records to a file so they never draw over the terminal UI."""
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    StorefrontApp().run()


if __name__ == "__main__":
    main()
