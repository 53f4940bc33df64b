"""Pydantic schemas for dashboard endpoints.

Every endpoint answers with a ``DashboardResult`` envelope so the client can
tell live figures from placeholder figures substituted after a failed query.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

# =============================================================================
# Enums
# =============================================================================


class TrendDirection(str, Enum):
    """Direction arrow shown on a KPI card."""

    UP = "up"
    DOWN = "down"


class TrendPeriod(str, Enum):
    """Bucketing used by the sales trend chart."""

    HOURLY = "hourly"
    DAILY = "daily"


class ResultStatus(str, Enum):
    """Whether a result came from the data store or from fallback data."""

    OK = "ok"
    DEGRADED = "degraded"


# =============================================================================
# Output Records
# =============================================================================


class MetricCard(BaseModel):
    """A single KPI card.

    ``change`` and ``trend`` are fixed per card and are not derived from
    the data; period-over-period comparison is not computed.
    """

    id: str = Field(..., description="Stable card identifier, e.g. total_sales.")
    title: str = Field(..., description="Card heading shown to the user.")
    value: Decimal = Field(..., ge=0, description="Metric value.")
    change: float = Field(..., description="Percent change versus the previous period.")
    trend: TrendDirection = Field(..., description="Arrow direction for the change.")
    icon: str = Field(..., description="Icon name understood by the frontend.")
    color: str = Field(..., description="Theme color tag.")


class TrendPoint(BaseModel):
    """One point on the sales trend chart."""

    name: str = Field(..., description='Bucket label, "H:00" for hours or "Mon DD" for days.')
    value: Decimal = Field(..., ge=0, description="Summed transaction amount in the bucket.")
    transactions: int = Field(..., ge=0, description="Number of transactions in the bucket.")


class RegionSummary(BaseModel):
    """Sales aggregated for one geographic region."""

    region: str = Field(..., description='Region name, "Unknown" when the store has none.')
    value: Decimal = Field(..., ge=0, description="Summed transaction amount.")
    transactions: int = Field(..., ge=0, description="Number of transactions.")
    growth: float = Field(..., description="Growth percent. Currently a random placeholder.")
    cities: list[str] = Field(
        default_factory=list,
        description="Distinct cities with sales in the region, sorted.",
    )


class ProductSummary(BaseModel):
    """Sales aggregated for one product name."""

    name: str = Field(..., description='Product name, "Unknown" when missing.')
    sales: Decimal = Field(..., ge=0, description="Summed line totals.")
    units: int = Field(..., ge=0, description="Summed quantities.")
    category: str = Field(..., description="First category seen for the product.")
    brand: str = Field(..., description="First brand seen for the product.")


# =============================================================================
# Result Envelope
# =============================================================================


class DashboardResult[T](BaseModel):
    """Tagged result of a dashboard read.

    ``status`` is ``degraded`` when the query failed and ``data`` holds
    placeholder values; ``reason`` then carries the error summary.
    """

    status: ResultStatus = Field(..., description="ok for live data, degraded for fallback data.")
    data: T = Field(..., description="Payload of the operation.")
    reason: str | None = Field(None, description="Why fallback data was returned.")
    generated_at: datetime = Field(..., description="Instant the result was computed.")

    @property
    def is_degraded(self) -> bool:
        """True when ``data`` is placeholder data."""
        return self.status == ResultStatus.DEGRADED
