from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cryptsearch.core.config import get_settings


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Cipher families the search engine can attack."""

    COLUMNAR = "columnar"
    PERIODIC = "periodic"
    VIGENERE = "vigenere"
    BEAUFORT = "beaufort"

    @property
    def is_transposition(self) -> bool:
        return self in (CipherFamily.COLUMNAR, CipherFamily.PERIODIC)


class JobStatus(str, Enum):
    """Lifecycle of a submitted search job."""

    RUNNING = "running"
    COMPLETED = "completed"
    NO_SOLUTION = "no_solution"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    FAILED = "failed"

    @property
    def is_finished(self) -> bool:
        return self != JobStatus.RUNNING


# ============================================================================
# Search Configuration
# ============================================================================


def _coerce_int(value: Any, default: int) -> int:
    """Read an integer field, substituting the default for malformed input."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


class SearchConfiguration(BaseModel):
    """
    Parameters for one search.

    Built once per request and frozen for the lifetime of the search.
    Non-numeric key length or period values fall back to the configured
    defaults instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    cipher_family: CipherFamily
    max_key_length: int = Field(
        default_factory=lambda: get_settings().default_max_key_length,
        description="Upper bound on permutation length (or period when checking all periods)",
    )
    period: int = Field(
        default_factory=lambda: get_settings().default_period,
        description="Period to explore, or the starting period in check-all mode",
    )
    check_all_periods: bool = False
    transpose: bool = Field(
        default=False,
        description="Use the column-major layout when flattening columnar output",
    )
    timeout_seconds: float | None = Field(default=None, gt=0)

    @field_validator("max_key_length", mode="before")
    @classmethod
    def _fallback_max_key_length(cls, value: Any) -> int:
        return _coerce_int(value, get_settings().default_max_key_length)

    @field_validator("period", mode="before")
    @classmethod
    def _fallback_period(cls, value: Any) -> int:
        return _coerce_int(value, get_settings().default_period)


# ============================================================================
# Period Estimation Schemas
# ============================================================================


class PeriodEstimate(BaseModel):
    """Index-of-coincidence measurements for a single period."""

    period: int
    column_ics: list[float]
    average_ic: float
    distance: float = Field(ge=0.0, description="|average_ic - reference_ic|, lower is better")


class PeriodReport(BaseModel):
    """Periods ranked by closeness to the English index of coincidence."""

    reference_ic: float
    estimates: list[PeriodEstimate] = Field(default_factory=list)

    def best_periods(self, count: int = 3) -> list[int]:
        """Return the `count` most plausible periods."""
        return [estimate.period for estimate in self.estimates[:count]]


# ============================================================================
# Request Schemas
# ============================================================================


class SearchRequest(SearchConfiguration):
    """Request schema for submitting a search job."""

    ciphertext: str = Field(min_length=1)

    def configuration(self) -> SearchConfiguration:
        return SearchConfiguration(**self.model_dump(exclude={"ciphertext"}))


class PeriodRequest(BaseModel):
    """Request schema for /period endpoint."""

    ciphertext: str = Field(min_length=1)
    max_period: int = Field(default=10, ge=1)


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1)
    cipher_family: CipherFamily
    key: list[int] | str
    transpose: bool = False


# ============================================================================
# Response Schemas
# ============================================================================


class CandidateResponse(BaseModel):
    """One ranked decryption candidate."""

    model_config = ConfigDict(from_attributes=True)

    score: float
    plaintext: str
    key: list[int]


class SearchJobResponse(BaseModel):
    """State of a search job."""

    job_id: str
    status: JobStatus
    cipher_family: CipherFamily
    total_keys: int
    keys_tried: int | None = None
    candidates: list[CandidateResponse] = Field(default_factory=list)
    message: str | None = None


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    key_used: list[int]
    score: float


class SearchHistoryItem(BaseModel):
    """Single history item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: str
    ciphertext_hash: str
    ciphertext_preview: str
    cipher_family: CipherFamily
    status: JobStatus
    best_score: float | None
    created_at: datetime


class HistoryResponse(BaseModel):
    """Response schema for /history endpoint."""

    items: list[SearchHistoryItem]
    total: int
    page: int
    page_size: int


class SearchDetailResponse(BaseModel):
    """Full stored search."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: str
    ciphertext_hash: str
    ciphertext: str
    cipher_family: CipherFamily
    parameters_used: dict[str, Any]
    status: JobStatus
    candidates: list[dict[str, Any]]
    best_plaintext: str | None
    best_score: float | None
    total_keys: int
    keys_tried: int
    message: str | None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
