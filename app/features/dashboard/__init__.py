"""Dashboard module: KPI cards, sales trend, regional and product breakdowns.

Reads transaction rows directly and substitutes placeholder data when a
query fails, tagging such results as degraded.
"""

from app.features.dashboard.routes import router
from app.features.dashboard.schemas import (
    DashboardResult,
    MetricCard,
    ProductSummary,
    RegionSummary,
    ResultStatus,
    TrendPeriod,
    TrendPoint,
)
from app.features.dashboard.service import DashboardReader

__all__ = [
    "DashboardReader",
    "DashboardResult",
    "MetricCard",
    "ProductSummary",
    "RegionSummary",
    "ResultStatus",
    "TrendPeriod",
    "TrendPoint",
    "router",
]
