import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from cryptsearch.core.config import Settings, get_settings
from cryptsearch.core.exceptions import (
    JobNotFoundError,
    SearchAbortedError,
    SearchCancelledError,
    SearchError,
    SearchTimeoutError,
)
from cryptsearch.models.schemas import JobStatus, SearchConfiguration
from cryptsearch.services.keyspace.generator import count_keys
from cryptsearch.services.preprocessing.limits import check_search_limits
from cryptsearch.services.search.collector import Candidate
from cryptsearch.services.search.handle import SearchHandle, start_search

logger = logging.getLogger(__name__)


@dataclass
class SearchJob:
    """A submitted search and what is known about it so far."""

    job_id: str
    text: str
    config: SearchConfiguration
    handle: SearchHandle
    total_keys: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    status: JobStatus = JobStatus.RUNNING
    candidates: list[Candidate] = field(default_factory=list)
    keys_tried: int | None = None
    message: str | None = None

    # Set once the finished job has been written to history
    persisted: bool = False

    def refresh(self) -> JobStatus:
        """Pull the latest state from the search thread."""
        if self.status.is_finished:
            return self.status

        try:
            outcome = self.handle.poll()
        except SearchCancelledError as e:
            self._finish(JobStatus.CANCELLED, e)
        except SearchTimeoutError as e:
            self._finish(JobStatus.TIMED_OUT, e)
        except SearchAbortedError as e:
            self._finish(JobStatus.FAILED, e)
        except SearchError as e:
            logger.error("Search job %s failed: %s", self.job_id, e.message)
            self._finish(JobStatus.FAILED, e)
        else:
            if outcome is not None:
                self.candidates = outcome.candidates
                self.keys_tried = outcome.keys_tried
                if outcome.found:
                    self.status = JobStatus.COMPLETED
                else:
                    self.status = JobStatus.NO_SOLUTION
                    self.message = "No candidate could be produced for this input"

        return self.status

    def _finish(self, status: JobStatus, error: SearchError) -> None:
        self.status = status
        self.message = error.message
        self.keys_tried = error.details.get("keys_tried")


class SearchJobManager:
    """
    In-memory registry of search jobs, keyed by job id.

    Jobs leave the registry once they are written to history. Past
    `max_tracked_jobs`, the oldest finished jobs are dropped even if
    nobody collected them.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._jobs: dict[str, SearchJob] = {}
        self._lock = threading.Lock()

    def submit(self, text: str, config: SearchConfiguration) -> SearchJob:
        """
        Start a search and register it.

        Args:
            text: Ciphertext, already sanitized
            config: Search parameters

        Returns:
            The newly created job

        Raises:
            KeyLengthTooLargeError: If the key length or period is above the limit
        """
        check_search_limits(config, self.settings)

        total = count_keys(text, config)
        job = SearchJob(
            job_id=uuid.uuid4().hex,
            text=text,
            config=config,
            handle=start_search(text, config),
            total_keys=total,
        )
        with self._lock:
            self._jobs[job.job_id] = job
        self._evict_finished()

        logger.info(
            "Submitted search job %s (%s, %d keys)",
            job.job_id, config.cipher_family.value, total,
        )
        return job

    def get(self, job_id: str) -> SearchJob:
        """
        Look up a job and refresh its state.

        Raises:
            JobNotFoundError: If the id is unknown
        """
        with self._lock:
            job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        job.refresh()
        return job

    def cancel(self, job_id: str) -> SearchJob:
        """Request cancellation; the job reports CANCELLED once its workers stop."""
        job = self.get(job_id)
        if not job.status.is_finished:
            logger.info("Cancelling search job %s", job_id)
            job.handle.cancel()
        return job

    def remove(self, job_id: str) -> None:
        """Forget a job; unknown ids are ignored."""
        with self._lock:
            self._jobs.pop(job_id, None)

    def _evict_finished(self) -> None:
        with self._lock:
            jobs = list(self._jobs.values())
        excess = len(jobs) - self.settings.max_tracked_jobs
        if excess <= 0:
            return

        finished = [job for job in jobs if job.refresh().is_finished]
        finished.sort(key=lambda job: job.created_at)
        for job in finished[:excess]:
            logger.warning("Dropping uncollected search job %s", job.job_id)
            self.remove(job.job_id)

    def shutdown(self) -> None:
        """Cancel every running job."""
        with self._lock:
            jobs = list(self._jobs.values())
        for job in jobs:
            job.handle.cancel()

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
