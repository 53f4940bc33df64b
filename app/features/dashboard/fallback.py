"""Placeholder data returned when a dashboard query fails.

Fixed tables are rebuilt on every call so callers can never mutate a
shared instance. Random series draw from the ``random.Random`` handed in,
which makes them reproducible under a fixed seed.
"""

import random
from decimal import Decimal

from app.features.dashboard.clock import HOURS_PER_DAY, DashboardClock
from app.features.dashboard.schemas import (
    MetricCard,
    ProductSummary,
    RegionSummary,
    TrendDirection,
    TrendPoint,
)

# Card layout: (id, title, change, trend, icon, color). Order is part of the
# contract with the frontend.
KPI_CARD_LAYOUT: tuple[tuple[str, str, float, TrendDirection, str, str], ...] = (
    ("total_sales", "Total Sales", 12.5, TrendDirection.UP, "DollarSign", "primary"),
    ("transactions", "Transactions", 8.3, TrendDirection.UP, "ShoppingCart", "secondary"),
    ("avg_basket", "Avg Basket Size", -2.1, TrendDirection.DOWN, "TrendingUp", "success"),
    ("active_outlets", "Active Outlets", 5.7, TrendDirection.UP, "MapPin", "warning"),
    ("active_skus", "Active SKUs", 3.2, TrendDirection.UP, "Package", "info"),
)

KPI_CARD_IDS: tuple[str, ...] = tuple(card[0] for card in KPI_CARD_LAYOUT)

MOCK_KPI_VALUES: dict[str, Decimal] = {
    "total_sales": Decimal("1234567"),
    "transactions": Decimal("8234"),
    "avg_basket": Decimal("150"),
    "active_outlets": Decimal("234"),
    "active_skus": Decimal("1876"),
}

MOCK_TREND_VALUE_RANGE = (1000, 6000)
MOCK_TREND_COUNT_RANGE = (10, 60)

MOCK_GROWTH_RANGE = (-5.0, 15.0)


def build_metric_cards(values: dict[str, Decimal]) -> list[MetricCard]:
    """Lay out KPI values as cards in the fixed card order.

    Args:
        values: Metric value per card id. Must contain every id in
            ``KPI_CARD_IDS``.

    Returns:
        Five cards, ordered as ``KPI_CARD_LAYOUT``.
    """
    return [
        MetricCard(
            id=card_id,
            title=title,
            value=values[card_id],
            change=change,
            trend=trend,
            icon=icon,
            color=color,
        )
        for card_id, title, change, trend, icon, color in KPI_CARD_LAYOUT
    ]


def mock_kpi_cards() -> list[MetricCard]:
    """Fixed KPI cards."""
    return build_metric_cards(MOCK_KPI_VALUES)


def mock_sales_trend(rng: random.Random) -> list[TrendPoint]:
    """Twenty-four random hourly points.

    Used for both hourly and daily requests.
    """
    low_value, high_value = MOCK_TREND_VALUE_RANGE
    low_count, high_count = MOCK_TREND_COUNT_RANGE
    return [
        TrendPoint(
            name=DashboardClock.hour_label(hour),
            value=Decimal(rng.randrange(low_value, high_value)),
            transactions=rng.randrange(low_count, high_count),
        )
        for hour in range(HOURS_PER_DAY)
    ]


def random_growth(rng: random.Random) -> float:
    """Placeholder growth percent in [-5, 15)."""
    low, high = MOCK_GROWTH_RANGE
    return low + rng.random() * (high - low)


def mock_regions() -> list[RegionSummary]:
    """Fixed three-region breakdown."""
    return [
        RegionSummary(region="NCR", value=Decimal("450000"), transactions=1200, growth=15.2),
        RegionSummary(region="Region VII", value=Decimal("320000"), transactions=850, growth=12.8),
        RegionSummary(region="Region III", value=Decimal("280000"), transactions=750, growth=18.5),
    ]


def mock_products(limit: int) -> list[ProductSummary]:
    """Fixed top-products table, cut to ``limit`` rows."""
    products = [
        ProductSummary(
            name="Winston Red",
            sales=Decimal("180000"),
            units=3200,
            category="cigarettes",
            brand="JTI",
        ),
        ProductSummary(
            name="Marlboro Gold",
            sales=Decimal("145000"),
            units=2800,
            category="cigarettes",
            brand="Philip Morris",
        ),
        ProductSummary(
            name="Fortune Red",
            sales=Decimal("125000"),
            units=2100,
            category="cigarettes",
            brand="Fortune",
        ),
    ]
    return products[:limit]
