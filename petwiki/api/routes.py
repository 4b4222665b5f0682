"""FastAPI routes for the dictionary, breed pages, gallery and JSON API."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, Form, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from petwiki.data.schemas import (
    GalleryItem,
    ListingView,
    Pet,
    PetType,
    VideoJobStatus,
)
from petwiki.listing.controller import BreedListingController
from petwiki.listing.mapper import (
    gallery_images,
    parse_story,
    pet_category,
    pet_type,
    placeholder_image_url,
)
from petwiki.media.video_jobs import FAILED, TIMED_OUT
from petwiki.providers.errors import FetchError

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

GENERATION_FAILED_MESSAGE = "Generation failed. Please try again or check your API key."
VIDEO_TIMED_OUT_MESSAGE = "Video generation took too long. Please try again."


def _render_listing(
    request: Request, controller: BreedListingController, template: str
) -> HTMLResponse:
    """Load the listing for the request's query string and render it."""
    view = controller.load(request.query_params)
    pager = controller.pagination_for(request.query_params)
    return templates.TemplateResponse(
        request,
        template,
        {
            "view": view,
            "dog_url": pager.url_for(pager.change_type_filter(PetType.DOG)),
            "cat_url": pager.url_for(pager.change_type_filter(PetType.CAT)),
            "active_type": view.filter.effective_type,
            "clear_url": "/dictionary/clear",
            "default_per_page": controller.default_per_page,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    """Landing page with breed search and dog/cat category cards."""
    return templates.TemplateResponse(request, "home.html", {})


@router.get("/dictionary", response_class=HTMLResponse)
def dictionary(request: Request) -> HTMLResponse:
    """Breed listing driven by the ``q``, ``type``, ``page``, ``per_page`` params."""
    return _render_listing(request, request.app.state.listing, "dictionary.html")


@router.get("/dictionary/search")
def dictionary_search(request: Request, text: str = "") -> RedirectResponse:
    """Apply a search to the current listing state and redirect to it.

    Blank text leaves the state unchanged.
    """
    pager = request.app.state.listing.pagination_for(request.query_params)
    return RedirectResponse(pager.url_for(pager.submit_search(text)), status_code=303)


@router.get("/dictionary/clear")
def dictionary_clear(request: Request) -> RedirectResponse:
    """Drop the search and type filter, back to the default listing."""
    pager = request.app.state.listing.pagination_for(request.query_params)
    return RedirectResponse(pager.url_for(pager.clear_search()), status_code=303)


@router.get("/dictionary-test", response_class=HTMLResponse)
def dictionary_test(request: Request) -> HTMLResponse:
    """Pagination test page over mock pets."""
    return _render_listing(request, request.app.state.test_listing, "dictionary_test.html")


@router.get("/breed/{slug}", response_class=HTMLResponse)
def pet_detail(request: Request, slug: str) -> HTMLResponse:
    """Curated pet page.

    Uses the featured image, else a generated one, else a placeholder.
    """
    try:
        pet: Pet = request.app.state.rest_provider.fetch_pet_by_slug(slug)
    except FetchError as err:
        logger.warning("Could not load pet %s: %s", slug, err)
        return templates.TemplateResponse(
            request, "pet_detail.html", {"error": "Could not load pet details."}
        )

    kind = pet_type(pet)
    if pet.featured_image is not None and pet.featured_image.url:
        main_image = pet.featured_image.url
    else:
        main_image = request.app.state.media.image_or_placeholder(pet.name, pet.name, kind)

    english_name, more_info = parse_story(pet.story)
    return templates.TemplateResponse(
        request,
        "pet_detail.html",
        {
            "pet": pet,
            "pet_type": kind,
            "category": pet_category(pet),
            "main_image": main_image,
            "ai_generated": pet.featured_image is None,
            "english_name": english_name,
            "more_info": more_info,
            "gallery": gallery_images(pet),
            "paragraphs": [p.strip() for p in pet.description.split("\n") if p.strip()],
        },
    )


@router.get("/breed/{breed_type}/{name}", response_class=HTMLResponse)
def breed_detail(request: Request, breed_type: str, name: str) -> HTMLResponse:
    """Generated breed page with an AI image (placeholder on failure)."""
    try:
        kind = PetType(breed_type.lower())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown pet type: {breed_type}") from None

    try:
        detail = request.app.state.generative_provider.get_breed_detail(name, kind)
    except FetchError as err:
        logger.warning("Could not load breed %s/%s: %s", kind.value, name, err)
        return templates.TemplateResponse(
            request, "breed_detail.html", {"error": "Could not load breed details."}
        )

    main_image = request.app.state.media.image_or_placeholder(
        f"{name} {kind.value}", name, kind.value
    )
    thumbnails = [
        placeholder_image_url(f"{detail.name}{i}", PetType.DOG.value, 400, 400)
        for i in (1, 2, 3)
    ]
    return templates.TemplateResponse(
        request,
        "breed_detail.html",
        {"detail": detail, "main_image": main_image, "thumbnails": thumbnails},
    )


def _render_gallery(
    request: Request,
    *,
    error: str | None = None,
    job: VideoJobStatus | None = None,
    prompt: str = "",
    kind: str = "image",
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "gallery.html",
        {
            "items": request.app.state.gallery.items(),
            "has_api_key": bool(request.app.state.config.gemini_api_key),
            "error": error,
            "job": job,
            "prompt": prompt,
            "kind": kind,
        },
    )


@router.get("/gallery", response_class=HTMLResponse)
async def gallery(request: Request, job: str | None = None) -> HTMLResponse:
    """Gallery grid with the AI generation form.

    With ``job``, the page also reports that video generation: progress while
    it runs, an alert if it failed or timed out.
    """
    video_job = request.app.state.video_jobs.get(job) if job else None
    if video_job is None:
        return _render_gallery(request)

    status = video_job.snapshot()
    error = None
    if status.status == FAILED:
        error = GENERATION_FAILED_MESSAGE
    elif status.status == TIMED_OUT:
        error = VIDEO_TIMED_OUT_MESSAGE
    return _render_gallery(request, error=error, job=status, kind="video")


@router.post("/gallery", response_class=HTMLResponse)
def gallery_generate(
    request: Request,
    prompt: str = Form(""),  # noqa: B008
    kind: str = Form("image"),  # noqa: B008
) -> Response:
    """Generate an image now, or start a background video job.

    Failures are reported to the user as an explicit alert.
    """
    prompt = prompt.strip()
    if not prompt:
        return _render_gallery(request, kind=kind)

    if kind == "video":
        try:
            job = request.app.state.video_jobs.submit(prompt)
        except FetchError as err:
            logger.warning("Video generation could not start: %s", err)
            return _render_gallery(
                request, error=GENERATION_FAILED_MESSAGE, prompt=prompt, kind=kind
            )
        return RedirectResponse(f"/gallery?job={job.id}", status_code=303)

    try:
        url = request.app.state.media.generate_image(prompt)
    except FetchError as err:
        logger.warning("Image generation failed: %s", err)
        return _render_gallery(request, error=GENERATION_FAILED_MESSAGE, prompt=prompt)

    request.app.state.gallery.add(
        GalleryItem(
            id=uuid.uuid4().hex,
            url=url,
            title=prompt,
            type="image",
            prompt=prompt,
        )
    )
    return _render_gallery(request)


@router.post("/gallery/videos/{job_id}/cancel")
def gallery_cancel_video(request: Request, job_id: str) -> RedirectResponse:
    """Cancel a video generation from the gallery page and return to it."""
    job = request.app.state.video_jobs.cancel(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Unknown video job")
    return RedirectResponse(f"/gallery?job={job.id}", status_code=303)


@router.get("/health")
def health_check(request: Request) -> dict:
    """Health check endpoint for monitoring.

    Returns:
        Dict with system health status.
    """
    api_healthy = request.app.state.rest_provider.ping()
    return {
        "status": "healthy" if api_healthy else "degraded",
        "pet_api": "connected" if api_healthy else "disconnected",
        "gemini": "configured" if request.app.state.config.gemini_api_key else "missing key",
    }


@router.get("/api/breeds", response_model=ListingView)
def api_breeds(request: Request) -> ListingView:
    """JSON listing for the same query parameters as ``/dictionary``.

    The ``filter`` field echoes the state the result was fetched for, so
    clients can drop responses for a state they have navigated away from.
    """
    view = request.app.state.listing.load(request.query_params)
    if view.error:
        raise HTTPException(status_code=502, detail=view.error)
    return view


@router.get("/api/pets/{slug}", response_model=Pet)
def api_pet(request: Request, slug: str) -> Pet:
    """JSON detail of a curated pet."""
    try:
        return request.app.state.rest_provider.fetch_pet_by_slug(slug)
    except FetchError as err:
        raise HTTPException(status_code=502, detail=err.user_message) from err


@router.get("/api/gallery/videos/{job_id}", response_model=VideoJobStatus)
async def video_status(request: Request, job_id: str) -> VideoJobStatus:
    """Status of a background video generation."""
    job = request.app.state.video_jobs.get(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Unknown video job")
    return job.snapshot()


@router.post("/api/gallery/videos/{job_id}/cancel", response_model=VideoJobStatus)
async def video_cancel(request: Request, job_id: str) -> VideoJobStatus:
    """Cancel a background video generation."""
    job = request.app.state.video_jobs.cancel(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Unknown video job")
    return job.snapshot()
