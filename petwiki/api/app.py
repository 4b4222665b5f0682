"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from petwiki.config import Config, get_config
from petwiki.listing.controller import BreedListingController
from petwiki.media.gallery import Gallery
from petwiki.media.generator import MediaGenerator
from petwiki.media.video_jobs import VideoJobManager
from petwiki.providers.base import BreedDataProvider
from petwiki.providers.gemini_client import LazyGenaiClient
from petwiki.providers.generative import GenerativeBreedProvider
from petwiki.providers.mock import MockBreedProvider
from petwiki.providers.rest import RestPetProvider

logger = logging.getLogger(__name__)


def select_provider(
    config: Config,
    rest: RestPetProvider,
    generative: GenerativeBreedProvider,
) -> BreedDataProvider:
    """Pick the dictionary provider named by ``config.breed_source``.

    Raises:
        ValueError: If the configured source is unknown.
    """
    providers: dict[str, BreedDataProvider] = {"rest": rest, "generative": generative}
    try:
        return providers[config.breed_source]
    except KeyError:
        raise ValueError(
            f"Unknown BREED_SOURCE {config.breed_source!r}; expected 'rest' or 'generative'"
        ) from None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize shared resources on startup, clean up on shutdown.

    Creates the REST and Gemini-backed providers, the listing controllers,
    the media generator, the gallery and the video job manager shared by all
    requests.
    """
    config: Config = app.state.config

    genai_client = LazyGenaiClient(config.gemini_api_key)
    app.state.rest_provider = RestPetProvider(
        config.api_base_url, timeout=config.request_timeout
    )
    app.state.generative_provider = GenerativeBreedProvider(
        genai_client,
        model=config.text_model,
        list_size=config.breed_list_size,
        search_limit=config.search_result_limit,
    )
    app.state.listing = BreedListingController(
        select_provider(config, app.state.rest_provider, app.state.generative_provider),
        base_path="/dictionary",
        default_per_page=config.default_per_page,
    )
    app.state.test_listing = BreedListingController(
        MockBreedProvider(),
        base_path="/dictionary-test",
        default_per_page=config.default_per_page,
    )
    app.state.media = MediaGenerator(
        genai_client,
        media_dir=config.media_dir,
        image_model=config.image_model,
        video_model=config.video_model,
        poll_interval=config.video_poll_interval,
        max_wait=config.video_max_wait,
    )
    app.state.gallery = Gallery()
    app.state.video_jobs = VideoJobManager(app.state.media, app.state.gallery)

    logger.info(
        "PetWiki ready: source=%s api=%s gemini=%s",
        config.breed_source,
        config.api_base_url,
        "configured" if genai_client.configured else "missing key",
    )

    yield

    app.state.video_jobs.cancel_all()
    app.state.rest_provider.session.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration to use; read from the environment if omitted.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_config()

    app = FastAPI(
        title="PetWiki",
        description="Dog and cat breed encyclopedia with an AI pet gallery",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    static_dir = Path(__file__).parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.mount(
        "/media",
        StaticFiles(directory=str(config.media_dir), check_dir=False),
        name="media",
    )

    from petwiki.api.routes import router

    app.include_router(router)

    return app
