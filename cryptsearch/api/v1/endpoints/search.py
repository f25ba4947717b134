import hashlib
import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select

from cryptsearch.core.exceptions import JobNotFoundError, ValidationError
from cryptsearch.dependencies import DbSessionDep, JobManagerDep, SettingsDep
from cryptsearch.models.database import SearchRecord
from cryptsearch.models.schemas import (
    CandidateResponse,
    ErrorResponse,
    SearchJobResponse,
    SearchRequest,
)
from cryptsearch.services.preprocessing.limits import check_ciphertext_length
from cryptsearch.services.preprocessing.normalizer import TextNormalizer
from cryptsearch.services.search.jobs import SearchJob

logger = logging.getLogger(__name__)

router = APIRouter()


def _job_response(job: SearchJob) -> SearchJobResponse:
    return SearchJobResponse(
        job_id=job.job_id,
        status=job.status,
        cipher_family=job.config.cipher_family,
        total_keys=job.total_keys,
        keys_tried=job.keys_tried,
        candidates=[
            CandidateResponse(score=c.score, plaintext=c.plaintext, key=list(c.key))
            for c in job.candidates
        ],
        message=job.message,
    )


def _record_response(record: SearchRecord) -> SearchJobResponse:
    return SearchJobResponse(
        job_id=record.job_id,
        status=record.status,
        cipher_family=record.cipher_family,
        total_keys=record.total_keys,
        keys_tried=record.keys_tried,
        candidates=[CandidateResponse(**candidate) for candidate in record.candidates],
        message=record.message,
    )


async def _stored_job(
    job_id: str,
    db: DbSessionDep,
    error: JobNotFoundError,
) -> SearchJobResponse:
    """Serve a job that has already left the registry from history."""
    result = await db.execute(select(SearchRecord).where(SearchRecord.job_id == job_id))
    record = result.scalar_one_or_none()
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error.message,
        )
    return _record_response(record)


async def _persist(job: SearchJob, db: DbSessionDep) -> None:
    """Write a finished job to history, once."""
    if job.persisted or not job.status.is_finished:
        return

    best = job.candidates[0] if job.candidates else None
    record = SearchRecord(
        job_id=job.job_id,
        ciphertext_hash=hashlib.sha256(job.text.encode()).hexdigest(),
        ciphertext=job.text,
        cipher_family=job.config.cipher_family.value,
        parameters_used=job.config.model_dump(mode="json"),
        status=job.status.value,
        candidates=[
            {"score": c.score, "plaintext": c.plaintext, "key": list(c.key)}
            for c in job.candidates
        ],
        best_plaintext=best.plaintext if best else None,
        best_score=best.score if best else None,
        total_keys=job.total_keys,
        keys_tried=job.keys_tried or 0,
        message=job.message,
    )

    # Claimed before the await so a concurrent poll does not insert twice
    job.persisted = True
    try:
        db.add(record)
        await db.commit()
    except Exception:
        job.persisted = False
        raise


@router.post(
    "",
    response_model=SearchJobResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Search could not be started"},
    },
    summary="Start a key search",
    description=(
        "Start a background search of the key space for the chosen cipher family. "
        "Poll the returned job id for ranked candidates."
    ),
)
async def start_key_search(
    request: SearchRequest,
    settings: SettingsDep,
    jobs: JobManagerDep,
) -> SearchJobResponse:
    """
    Submit a search job.

    Whitespace is stripped from the ciphertext before the search starts;
    every other character is kept, since polyalphabetic inverses pass
    punctuation through and transpositions move it like any letter.
    Key lengths and periods above the configured limit are rejected.
    """
    try:
        check_ciphertext_length(request.ciphertext, settings)
        text = TextNormalizer().strip_whitespace(request.ciphertext)
        job = jobs.submit(text, request.configuration())
        return _job_response(job)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )
    except Exception as e:
        logger.exception("Failed to start search")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Search could not be started: {str(e)}",
        )


@router.get(
    "/{job_id}",
    response_model=SearchJobResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Job not found"},
        500: {"model": ErrorResponse, "description": "Failed to retrieve job"},
    },
    summary="Get search status",
    description=(
        "Poll a search job; finished jobs carry their ranked candidates. "
        "Once stored in history a job is served from there."
    ),
)
async def get_key_search(
    job_id: str,
    jobs: JobManagerDep,
    db: DbSessionDep,
) -> SearchJobResponse:
    """Get the current state of a search job."""
    try:
        job = jobs.get(job_id)
    except JobNotFoundError as e:
        return await _stored_job(job_id, db, e)

    try:
        await _persist(job, db)
    except Exception as e:
        logger.exception("Failed to store search job %s", job_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store search result: {str(e)}",
        )

    if job.persisted:
        jobs.remove(job_id)

    return _job_response(job)


@router.delete(
    "/{job_id}",
    response_model=SearchJobResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Job not found"},
    },
    summary="Cancel a search",
    description="Ask a running search to stop. Finished jobs are returned unchanged.",
)
async def cancel_key_search(
    job_id: str,
    jobs: JobManagerDep,
    db: DbSessionDep,
) -> SearchJobResponse:
    """Request cancellation of a search job."""
    try:
        job = jobs.cancel(job_id)
    except JobNotFoundError as e:
        return await _stored_job(job_id, db, e)

    return _job_response(job)
