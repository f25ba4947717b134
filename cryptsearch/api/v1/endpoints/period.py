from fastapi import APIRouter, HTTPException, status

from cryptsearch.core.exceptions import CiphertextTooLongError
from cryptsearch.dependencies import SettingsDep
from cryptsearch.models.schemas import ErrorResponse, PeriodReport, PeriodRequest
from cryptsearch.services.analysis.coincidence import estimate_period
from cryptsearch.services.preprocessing.limits import check_ciphertext_length

router = APIRouter()


@router.post(
    "",
    response_model=PeriodReport,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Estimate key period",
    description=(
        "Rank periods 1..max_period by how close the average Index of "
        "Coincidence of their columns comes to English."
    ),
)
async def estimate_key_period(
    request: PeriodRequest,
    settings: SettingsDep,
) -> PeriodReport:
    """
    Estimate the period of a polyalphabetic ciphertext.

    Case and non-letters are ignored. max_period is capped at the
    configured limit.
    """
    try:
        check_ciphertext_length(request.ciphertext, settings)
    except CiphertextTooLongError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    max_period = min(request.max_period, settings.max_period_limit)
    return estimate_period(request.ciphertext, max_period)
