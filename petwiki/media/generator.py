"""AI pet images and videos via Gemini and Veo."""

from __future__ import annotations

import base64
import io
import logging
import threading
import time
import uuid
from pathlib import Path

import requests
from google.genai import errors as genai_errors
from google.genai import types
from PIL import Image, UnidentifiedImageError
from tqdm import tqdm

from petwiki.listing.mapper import placeholder_image_url
from petwiki.providers.errors import (
    FetchError,
    GenerationCancelled,
    GenerationTimeout,
    MalformedResponse,
    UpstreamRejected,
)
from petwiki.providers.gemini_client import LazyGenaiClient

logger = logging.getLogger(__name__)


class MediaGenerator:
    """Generates pet images (inline) and videos (downloaded to disk).

    Args:
        client: Lazily built Gemini client.
        media_dir: Directory receiving downloaded videos.
        image_model: Image generation model name.
        video_model: Video generation model name.
        poll_interval: Seconds between video operation polls.
        max_wait: Maximum seconds to wait for a video before giving up.
    """

    def __init__(
        self,
        client: LazyGenaiClient,
        media_dir: Path,
        image_model: str = "gemini-2.5-flash-image",
        video_model: str = "veo-3.1-fast-generate-preview",
        poll_interval: float = 5.0,
        max_wait: float = 600.0,
    ) -> None:
        self.client = client
        self.media_dir = media_dir
        self.image_model = image_model
        self.video_model = video_model
        self.poll_interval = poll_interval
        self.max_wait = max_wait

    @property
    def video_dir(self) -> Path:
        return self.media_dir / "videos"

    def generate_image(self, prompt: str) -> str:
        """Generate a square pet photo for *prompt*.

        Returns:
            ``data:image/png;base64,...`` URL of the first generated image.

        Raises:
            ConfigurationError: If no API key is configured.
            UpstreamRejected: If the API call fails.
            MalformedResponse: If no decodable image came back.
        """
        client = self.client.get()
        logger.info("Generating image for prompt=%r", prompt)
        try:
            response = client.models.generate_content(
                model=self.image_model,
                contents=[f"High quality, cute, artistic photo of {prompt}"],
                config=types.GenerateContentConfig(
                    image_config=types.ImageConfig(aspect_ratio="1:1"),
                ),
            )
        except genai_errors.APIError as err:
            logger.error("Image generation failed: %s", err)
            raise UpstreamRejected(f"Image generation failed: {err}") from err

        candidates = response.candidates or []
        content = candidates[0].content if candidates else None
        for part in (content.parts if content else None) or []:
            if part.inline_data is not None and part.inline_data.data:
                return _to_png_data_url(part.inline_data.data)
        raise MalformedResponse("No image generated")

    def image_or_placeholder(self, prompt: str, name: str, breed_type: str = "") -> str:
        """Generated image for a detail page, or a placeholder on any failure."""
        try:
            return self.generate_image(prompt)
        except FetchError as err:
            logger.info("Using placeholder image for %s: %s", name, err)
            return placeholder_image_url(name, breed_type, width=800, height=600)

    def generate_video(self, prompt: str, cancel_event: threading.Event) -> Path:
        """Generate a short video and download it into :attr:`video_dir`.

        Polls the long-running operation every ``poll_interval`` seconds
        until it completes, *cancel_event* is set, or ``max_wait`` elapses.

        Returns:
            Path of the downloaded MP4 file.

        Raises:
            GenerationCancelled: If *cancel_event* was set while waiting.
            GenerationTimeout: If the video was not ready within ``max_wait``.
            UpstreamRejected: If the API or the download fails.
            MalformedResponse: If the finished operation holds no video.
        """
        client = self.client.get()
        logger.info("Starting video generation for prompt=%r", prompt)
        try:
            operation = client.models.generate_videos(
                model=self.video_model,
                prompt=f"A cute cinematic video of {prompt}",
                config=types.GenerateVideosConfig(
                    number_of_videos=1,
                    resolution="720p",
                    aspect_ratio="16:9",
                ),
            )
            deadline = time.monotonic() + self.max_wait
            while not operation.done:
                if time.monotonic() >= deadline:
                    raise GenerationTimeout(
                        f"Video not ready after {self.max_wait:.0f}s"
                    )
                if cancel_event.wait(self.poll_interval):
                    raise GenerationCancelled("Video generation cancelled")
                operation = client.operations.get(operation)
        except genai_errors.APIError as err:
            logger.error("Video generation failed: %s", err)
            raise UpstreamRejected(f"Video generation failed: {err}") from err

        if operation.error:
            raise UpstreamRejected(f"Video generation failed: {operation.error}")
        videos = operation.response.generated_videos if operation.response else None
        if not videos or videos[0].video is None or not videos[0].video.uri:
            raise MalformedResponse("No video generated")

        self.video_dir.mkdir(parents=True, exist_ok=True)
        dest = self.video_dir / f"{uuid.uuid4().hex}.mp4"
        _download_file(videos[0].video.uri, dest, api_key=self.client.api_key)
        logger.info("Video saved to %s", dest)
        return dest


def _to_png_data_url(data: bytes) -> str:
    """Re-encode raw image bytes as a PNG data URL."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            buf = io.BytesIO()
            image.save(buf, format="PNG")
    except (UnidentifiedImageError, OSError) as err:
        raise MalformedResponse("Generated image could not be decoded") from err
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def _download_file(url: str, dest: Path, *, api_key: str | None = None) -> None:
    """Download a file with progress bar.

    Args:
        url: URL to download from.
        dest: Destination file path.
        api_key: Optional key appended as the ``key`` query parameter.

    Raises:
        UpstreamRejected: If download fails. No partial file is left behind.
    """
    logger.info("Downloading %s...", dest.name)
    params = {"key": api_key} if api_key else None
    try:
        with requests.get(url, params=params, stream=True, timeout=300) as response:
            response.raise_for_status()
            total_size = int(response.headers.get("content-length", 0))
            with (
                open(dest, "wb") as f,
                tqdm(total=total_size, unit="B", unit_scale=True) as pbar,
            ):
                for chunk in response.iter_content(chunk_size=8192):
                    f.write(chunk)
                    pbar.update(len(chunk))
    except requests.RequestException as err:
        dest.unlink(missing_ok=True)
        raise UpstreamRejected(f"Failed to download {dest.name}: {err}") from err
    except OSError:
        dest.unlink(missing_ok=True)
        raise
