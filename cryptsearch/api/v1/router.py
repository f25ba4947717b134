from fastapi import APIRouter

from cryptsearch.api.v1.endpoints import decrypt, history, period, search

api_router = APIRouter()

api_router.include_router(
    search.router,
    prefix="/search",
    tags=["Search"],
)

api_router.include_router(
    period.router,
    prefix="/period",
    tags=["Analysis"],
)

api_router.include_router(
    decrypt.router,
    prefix="/decrypt",
    tags=["Decryption"],
)

api_router.include_router(
    history.router,
    prefix="/history",
    tags=["History"],
)
