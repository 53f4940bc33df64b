"""API routes for dashboard endpoints.

Each endpoint returns a ``DashboardResult`` envelope. A ``degraded`` status
means the database query failed and ``data`` holds placeholder values.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.features.dashboard.deps import get_dashboard_reader
from app.features.dashboard.schemas import (
    DashboardResult,
    MetricCard,
    ProductSummary,
    RegionSummary,
    TrendPeriod,
    TrendPoint,
)
from app.features.dashboard.service import DashboardReader

logger = get_logger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/kpis",
    response_model=DashboardResult[list[MetricCard]],
    summary="Compute KPI cards",
    description="""
Compute the five KPI cards for a time range, in this order:
`total_sales`, `transactions`, `avg_basket`, `active_outlets`, `active_skus`.

- `avg_basket` is total sales / transactions, or 0 with no transactions.
- `change` and `trend` are fixed per card and not derived from data.
- Both bounds are inclusive ISO 8601 instants.
""",
)
async def get_kpis(
    start: datetime = Query(..., description="Start of the range (inclusive), ISO 8601."),
    end: datetime = Query(..., description="End of the range (inclusive), ISO 8601."),
    db: AsyncSession = Depends(get_db),
    reader: DashboardReader = Depends(get_dashboard_reader),
) -> DashboardResult[list[MetricCard]]:
    """Compute KPI cards for a time range.

    Args:
        start: Start of range (inclusive).
        end: End of range (inclusive).
        db: Database session.
        reader: Dashboard reader.

    Returns:
        Five KPI cards.

    Raises:
        ValidationError: If end precedes start.
    """
    # Naive instants are read as UTC
    start = reader.clock.localize(start)
    end = reader.clock.localize(end)
    if end < start:
        raise ValidationError(
            message="end must be >= start",
            details={"start": start.isoformat(), "end": end.isoformat()},
        )
    return await reader.compute_kpis(db=db, start=start, end=end)


@router.get(
    "/sales-trend",
    response_model=DashboardResult[list[TrendPoint]],
    summary="Compute sales trend",
    description="""
Sales trend for the chart.

- `hourly`: last 24 hours, always 24 buckets labelled `0:00` to `23:00`.
- `daily`: last `days` days, one point per day with sales, oldest first.
  `days` may not exceed `dashboard_max_trend_days`.
""",
)
async def get_sales_trend(
    period: TrendPeriod = Query(TrendPeriod.HOURLY, description="hourly or daily."),
    days: int = Query(
        1,
        ge=1,
        description="Window length in days for daily mode.",
    ),
    db: AsyncSession = Depends(get_db),
    reader: DashboardReader = Depends(get_dashboard_reader),
) -> DashboardResult[list[TrendPoint]]:
    """Compute hourly or daily sales trend.

    Raises:
        ValidationError: If days exceeds the configured maximum.
    """
    max_days = reader.settings.dashboard_max_trend_days
    if days > max_days:
        raise ValidationError(
            message=f"days must be <= {max_days}",
            details={"days": days, "max_days": max_days},
        )
    return await reader.compute_sales_trend(db=db, period=period, days=days)


@router.get(
    "/geography",
    response_model=DashboardResult[list[RegionSummary]],
    summary="Compute sales by region",
    description="""
Sales per store region over the trailing window (30 days by default).
Stores without a region are grouped under `Unknown`. `growth` is a
placeholder value.
""",
)
async def get_geography(
    db: AsyncSession = Depends(get_db),
    reader: DashboardReader = Depends(get_dashboard_reader),
) -> DashboardResult[list[RegionSummary]]:
    """Compute regional breakdown."""
    return await reader.compute_geographic_breakdown(db=db)


@router.get(
    "/products",
    response_model=DashboardResult[list[ProductSummary]],
    summary="Rank products by sales",
    description="""
Top products by sales, highest first. Aggregates the most recent
`limit × dashboard_product_overfetch_factor` transaction lines (factor 10 by
default), so totals are approximate for long histories. `limit` may not exceed
`dashboard_max_product_limit`.
""",
)
async def get_products(
    limit: int = Query(
        10,
        ge=1,
        description="Maximum number of products to return.",
    ),
    db: AsyncSession = Depends(get_db),
    reader: DashboardReader = Depends(get_dashboard_reader),
) -> DashboardResult[list[ProductSummary]]:
    """Compute product performance."""
    max_limit = reader.settings.dashboard_max_product_limit
    if limit > max_limit:
        raise ValidationError(
            message=f"limit must be <= {max_limit}",
            details={"limit": limit, "max_limit": max_limit},
        )
    return await reader.compute_product_performance(db=db, limit=limit)
