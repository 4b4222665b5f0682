"""Background video generation with cancellable job handles."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field

from petwiki.data.schemas import GalleryItem, VideoJobStatus
from petwiki.media.gallery import Gallery
from petwiki.media.generator import MediaGenerator
from petwiki.providers.errors import (
    FetchError,
    GenerationCancelled,
    GenerationTimeout,
)

logger = logging.getLogger(__name__)

PENDING = "pending"
RUNNING = "running"
SUCCEEDED = "succeeded"
FAILED = "failed"
CANCELLED = "cancelled"
TIMED_OUT = "timed_out"

FINISHED_STATES = {SUCCEEDED, FAILED, CANCELLED, TIMED_OUT}


@dataclass
class VideoJob:
    """Caller-visible handle of one video generation."""

    id: str
    prompt: str
    status: str = PENDING
    url: str | None = None
    error: str | None = None
    created_at: float = field(default_factory=time.time)
    cancel_event: threading.Event = field(default_factory=threading.Event, repr=False)

    @property
    def finished(self) -> bool:
        return self.status in FINISHED_STATES

    def cancel(self) -> None:
        """Ask the worker to stop at its next poll."""
        self.cancel_event.set()

    def snapshot(self) -> VideoJobStatus:
        return VideoJobStatus(
            id=self.id,
            prompt=self.prompt,
            status=self.status,
            url=self.url,
            error=self.error,
        )


class VideoJobManager:
    """Runs video generations on daemon threads.

    Successful videos are added to the gallery. Jobs are kept in memory for
    the life of the process.

    Args:
        generator: Media generator performing the actual calls.
        gallery: Gallery receiving finished videos.
        media_url: URL prefix under which ``generator.media_dir`` is served.
        max_finished_jobs: Finished jobs kept for status lookups; older ones
            are forgotten when a new job is submitted.
    """

    def __init__(
        self,
        generator: MediaGenerator,
        gallery: Gallery,
        media_url: str = "/media",
        max_finished_jobs: int = 100,
    ) -> None:
        self.generator = generator
        self.gallery = gallery
        self.media_url = media_url.rstrip("/")
        self.max_finished_jobs = max_finished_jobs
        self._jobs: dict[str, VideoJob] = {}
        self._threads: dict[str, threading.Thread] = {}
        self._lock = threading.Lock()

    def submit(self, prompt: str) -> VideoJob:
        """Start generating a video for *prompt*.

        Raises:
            ConfigurationError: If no API key is configured; no job is created.
        """
        self.generator.client.get()

        job = VideoJob(id=uuid.uuid4().hex, prompt=prompt)
        thread = threading.Thread(
            target=self._run, args=(job,), name=f"video-{job.id[:8]}", daemon=True
        )
        with self._lock:
            self._prune_finished()
            self._jobs[job.id] = job
            self._threads[job.id] = thread
        thread.start()
        logger.info("Submitted video job %s", job.id)
        return job

    def get(self, job_id: str) -> VideoJob | None:
        with self._lock:
            return self._jobs.get(job_id)

    def cancel(self, job_id: str) -> VideoJob | None:
        """Request cancellation of *job_id*; returns the job if it exists."""
        job = self.get(job_id)
        if job is not None and not job.finished:
            logger.info("Cancelling video job %s", job_id)
            job.cancel()
        return job

    def cancel_all(self) -> None:
        """Cancel every unfinished job, e.g. on shutdown."""
        with self._lock:
            jobs = list(self._jobs.values())
        for job in jobs:
            if not job.finished:
                job.cancel()

    def join(self, job_id: str, timeout: float | None = None) -> None:
        """Block until the worker of *job_id* exits."""
        with self._lock:
            thread = self._threads.get(job_id)
        if thread is not None:
            thread.join(timeout)

    def _prune_finished(self) -> None:
        # Caller holds self._lock.
        finished = [job_id for job_id, job in self._jobs.items() if job.finished]
        excess = len(finished) - self.max_finished_jobs
        for job_id in finished[: max(excess, 0)]:
            del self._jobs[job_id]

    def _run(self, job: VideoJob) -> None:
        try:
            self._execute(job)
        finally:
            with self._lock:
                self._threads.pop(job.id, None)

    def _execute(self, job: VideoJob) -> None:
        job.status = RUNNING
        try:
            path = self.generator.generate_video(job.prompt, job.cancel_event)
        except GenerationCancelled:
            job.status = CANCELLED
        except GenerationTimeout as err:
            job.status = TIMED_OUT
            job.error = str(err)
        except FetchError as err:
            logger.error("Video job %s failed: %s", job.id, err)
            job.status = FAILED
            job.error = err.user_message
        except Exception as err:
            logger.exception("Video job %s crashed", job.id)
            job.status = FAILED
            job.error = str(err)
        else:
            job.url = f"{self.media_url}/videos/{path.name}"
            job.status = SUCCEEDED
            self.gallery.add(
                GalleryItem(
                    id=job.id, url=job.url, title=job.prompt, type="video", prompt=job.prompt
                )
            )
        logger.info("Video job %s finished with status %s", job.id, job.status)
