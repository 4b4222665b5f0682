#!/usr/bin/env python3
"""PetWiki: Single entry point.

Launches the FastAPI web UI for the breed dictionary, breed pages and the
AI pet gallery, and opens it in the browser.

Usage:
    python main.py
    python main.py --port 8000
    python main.py --source generative   # dictionary backed by Gemini
    python main.py --no-browser
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import threading
import time
import webbrowser

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger("petwiki")


def _open_browser(url: str, delay: float = 2.0) -> None:
    """Open browser after a delay to give the server time to start.

    Args:
        url: URL to open in the browser.
        delay: Seconds to wait before opening.
    """
    def _delayed_open():
        time.sleep(delay)
        logger.info("Opening browser at %s", url)
        webbrowser.open(url)

    thread = threading.Thread(target=_delayed_open, daemon=True)
    thread.start()


def main() -> None:
    """Parse arguments, build the app and serve it with uvicorn."""
    from petwiki.config import get_config

    config = get_config()

    parser = argparse.ArgumentParser(description="PetWiki breed encyclopedia")
    parser.add_argument(
        "--port", type=int, default=config.port, help="Server port"
    )
    parser.add_argument(
        "--host", type=str, default=config.host, help="Server host"
    )
    parser.add_argument(
        "--source",
        choices=["rest", "generative"],
        default=config.breed_source,
        help="Data source backing the breed dictionary",
    )
    parser.add_argument(
        "--api-url", type=str, default=None, help="Pet management API base URL"
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open a browser window",
    )
    args = parser.parse_args()

    config = dataclasses.replace(
        config,
        breed_source=args.source,
        api_base_url=args.api_url or config.api_base_url,
    )

    if not config.gemini_api_key:
        logger.warning(
            "GEMINI_API_KEY is not set: generated breeds, images and videos are disabled."
        )

    logger.info(
        "Launching web UI on %s:%d (dictionary source: %s)",
        args.host,
        args.port,
        config.breed_source,
    )
    import uvicorn

    from petwiki.api.app import create_app

    app = create_app(config)

    if not args.no_browser:
        _open_browser(f"http://localhost:{args.port}")

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
