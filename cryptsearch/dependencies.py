from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cryptsearch.core.config import Settings, get_settings
from cryptsearch.db.session import get_db_session
from cryptsearch.services.search.jobs import SearchJobManager


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Database session dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with get_db_session() as session:
        yield session

DbSessionDep = Annotated[AsyncSession, Depends(get_db)]


# Search jobs live in memory for the lifetime of the process
@lru_cache
def get_job_manager() -> SearchJobManager:
    """Get the process-wide search job manager."""
    return SearchJobManager()

JobManagerDep = Annotated[SearchJobManager, Depends(get_job_manager)]
