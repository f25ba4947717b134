from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select

from cryptsearch.dependencies import DbSessionDep
from cryptsearch.models.database import SearchRecord
from cryptsearch.models.schemas import (
    ErrorResponse,
    HistoryResponse,
    SearchDetailResponse,
    SearchHistoryItem,
)

router = APIRouter()


@router.get(
    "",
    response_model=HistoryResponse,
    responses={
        500: {"model": ErrorResponse, "description": "Failed to retrieve history"},
    },
    summary="Get search history",
    description="Retrieve paginated history of finished searches.",
)
async def get_history(
    db: DbSessionDep,
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
) -> HistoryResponse:
    """
    Get paginated search history.

    Results are ordered by creation date, most recent first.
    """
    try:
        count_query = select(func.count()).select_from(SearchRecord)
        total_result = await db.execute(count_query)
        total = total_result.scalar() or 0

        offset = (page - 1) * page_size
        query = (
            select(SearchRecord)
            .order_by(SearchRecord.created_at.desc(), SearchRecord.id.desc())
            .offset(offset)
            .limit(page_size)
        )
        result = await db.execute(query)
        records = result.scalars().all()

        items = [
            SearchHistoryItem(
                id=record.id,
                job_id=record.job_id,
                ciphertext_hash=record.ciphertext_hash,
                ciphertext_preview=record.ciphertext[:100] + "..."
                if len(record.ciphertext) > 100
                else record.ciphertext,
                cipher_family=record.cipher_family,
                status=record.status,
                best_score=record.best_score,
                created_at=record.created_at,
            )
            for record in records
        ]

        return HistoryResponse(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
        )

    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to retrieve history: {str(e)}",
        )


@router.get(
    "/{search_id}",
    response_model=SearchDetailResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Search not found"},
        500: {"model": ErrorResponse, "description": "Failed to retrieve search"},
    },
    summary="Get a stored search",
    description="Retrieve a finished search by its history ID.",
)
async def get_search(
    search_id: int,
    db: DbSessionDep,
) -> SearchDetailResponse:
    """Get a stored search by ID."""
    try:
        query = select(SearchRecord).where(SearchRecord.id == search_id)
        result = await db.execute(query)
        record = result.scalar_one_or_none()

        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Search with ID {search_id} not found",
            )

        return SearchDetailResponse.model_validate(record)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to retrieve search: {str(e)}",
        )
