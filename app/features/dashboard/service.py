"""Service layer for dashboard reads.

Computes KPI cards, sales trends, regional and product breakdowns straight
from transaction rows. Each read is fail-soft: when a query fails the error
is logged and placeholder data is returned in a ``degraded`` result, unless
fallback is disabled in settings, in which case a ``DatabaseError`` is raised.
"""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from functools import partial
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.exceptions import DatabaseError
from app.core.logging import get_logger
from app.features.dashboard import fallback
from app.features.dashboard.clock import HOURS_PER_DAY, DashboardClock
from app.features.dashboard.schemas import (
    DashboardResult,
    MetricCard,
    ProductSummary,
    RegionSummary,
    ResultStatus,
    TrendPeriod,
    TrendPoint,
)
from app.features.data_platform.models import Product, Store, Transaction, TransactionItem

logger = get_logger(__name__)

UNKNOWN = "Unknown"


def _to_decimal(value: Any) -> Decimal:
    """Coerce a nullable numeric column value to Decimal."""
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


# =============================================================================
# Accumulators
# =============================================================================


@dataclass
class SalesBucket:
    """Running amount and transaction count for one group."""

    value: Decimal = Decimal("0")
    transactions: int = 0

    def add(self, amount: Any) -> None:
        self.value += _to_decimal(amount)
        self.transactions += 1


@dataclass
class RegionBucket(SalesBucket):
    """Sales bucket that also remembers which cities contributed."""

    cities: set[str] = field(default_factory=set)


@dataclass
class ProductBucket:
    """Running sales and units for one product name.

    Category and brand are taken from the first row seen.
    """

    category: str
    brand: str
    sales: Decimal = Decimal("0")
    units: int = 0


# =============================================================================
# Reader
# =============================================================================


class DashboardReader:
    """Computes dashboard aggregates from raw transaction rows.

    The reader holds no per-request state; the database session is passed
    to every call. Build one per request with ``get_dashboard_reader``.

    Args:
        settings: Application settings. Defaults to the cached settings.
        clock: Time source and calendar helpers.
        rng: Random source for placeholder values.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: DashboardClock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.clock = clock or DashboardClock(self.settings.dashboard_timezone)
        self.rng = rng or random.Random(self.settings.dashboard_mock_seed)

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    async def compute_kpis(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> DashboardResult[list[MetricCard]]:
        """Compute the five KPI cards for a time range.

        Args:
            db: Database session.
            start: Start of the range (inclusive).
            end: End of the range (inclusive).

        Returns:
            Cards in the order total_sales, transactions, avg_basket,
            active_outlets, active_skus.
        """
        return await self._read(
            db,
            "kpis",
            lambda: self._query_kpis(db, start, end),
            fallback.mock_kpi_cards,
        )

    async def compute_sales_trend(
        self,
        db: AsyncSession,
        period: TrendPeriod = TrendPeriod.HOURLY,
        days: int = 1,
    ) -> DashboardResult[list[TrendPoint]]:
        """Compute the sales trend series.

        Hourly mode covers the last 24 hours and always yields 24 buckets.
        Daily mode covers the last ``days`` days and yields one point per
        day that has transactions, oldest first.

        Args:
            db: Database session.
            period: Hourly or daily bucketing.
            days: Window length for daily mode. Ignored for hourly.

        Returns:
            Trend points for the chart.
        """
        if period == TrendPeriod.HOURLY:
            query = partial(self._query_hourly_trend, db)
        else:
            query = partial(self._query_daily_trend, db, days)

        return await self._read(
            db,
            f"sales_trend_{period.value}",
            query,
            lambda: fallback.mock_sales_trend(self.rng),
        )

    async def compute_geographic_breakdown(
        self,
        db: AsyncSession,
    ) -> DashboardResult[list[RegionSummary]]:
        """Aggregate sales by store region over the trailing window."""
        return await self._read(
            db,
            "geography",
            lambda: self._query_geography(db),
            fallback.mock_regions,
        )

    async def compute_product_performance(
        self,
        db: AsyncSession,
        limit: int = 10,
    ) -> DashboardResult[list[ProductSummary]]:
        """Rank products by sales.

        Only the most recent ``limit * dashboard_product_overfetch_factor``
        transaction lines are read, so totals are approximate when the
        line history is longer than that.

        Args:
            db: Database session.
            limit: Maximum number of products to return.

        Returns:
            Up to ``limit`` products, highest sales first.
        """
        return await self._read(
            db,
            "products",
            lambda: self._query_products(db, limit),
            lambda: fallback.mock_products(limit),
        )

    # -------------------------------------------------------------------------
    # Fail-soft wrapper
    # -------------------------------------------------------------------------

    async def _read[T](
        self,
        db: AsyncSession,
        operation: str,
        query: Callable[[], Awaitable[T]],
        make_fallback: Callable[[], T],
    ) -> DashboardResult[T]:
        generated_at = self.clock.now()
        try:
            data = await query()
        except Exception as e:
            logger.error(
                "dashboard.query_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                fallback_enabled=self.settings.dashboard_fallback_enabled,
                exc_info=True,
            )
            await self._rollback(db, operation)

            if not self.settings.dashboard_fallback_enabled:
                raise DatabaseError(
                    message=f"Dashboard query '{operation}' failed",
                    details={"operation": operation, "error_type": type(e).__name__},
                ) from e

            return DashboardResult(
                status=ResultStatus.DEGRADED,
                data=make_fallback(),
                reason=f"{type(e).__name__}: {operation} query failed",
                generated_at=generated_at,
            )

        return DashboardResult(
            status=ResultStatus.OK,
            data=data,
            generated_at=generated_at,
        )

    async def _rollback(self, db: AsyncSession, operation: str) -> None:
        """Reset the session after a failed statement."""
        try:
            await db.rollback()
        except Exception as e:
            logger.warning(
                "dashboard.rollback_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def _query_kpis(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> list[MetricCard]:
        tx_stmt = select(Transaction.total_amount, Transaction.items_count).where(
            (Transaction.timestamp >= start) & (Transaction.timestamp <= end)
        )
        rows = (await db.execute(tx_stmt)).all()

        # AsyncSession cannot run statements concurrently, so counts follow sequentially
        stores_stmt = select(func.count()).select_from(Store).where(Store.is_active.is_(True))
        active_outlets = int((await db.execute(stores_stmt)).scalar_one())

        products_stmt = select(func.count()).select_from(Product)
        active_skus = int((await db.execute(products_stmt)).scalar_one())

        total_sales = sum((_to_decimal(row.total_amount) for row in rows), Decimal("0"))
        transactions = len(rows)
        avg_basket = total_sales / transactions if transactions > 0 else Decimal("0")
        total_items = sum(row.items_count or 0 for row in rows)

        logger.info(
            "dashboard.kpis_computed",
            start=start.isoformat(),
            end=end.isoformat(),
            total_sales=float(total_sales),
            transactions=transactions,
            total_items=total_items,
            active_outlets=active_outlets,
            active_skus=active_skus,
        )

        return fallback.build_metric_cards(
            {
                "total_sales": total_sales,
                "transactions": Decimal(transactions),
                "avg_basket": avg_basket,
                "active_outlets": Decimal(active_outlets),
                "active_skus": Decimal(active_skus),
            }
        )

    async def _fetch_sales_since(self, db: AsyncSession, days: int) -> list[Any]:
        now = self.clock.now()
        since = self.clock.days_before(now, days)
        stmt = select(Transaction.timestamp, Transaction.total_amount).where(
            (Transaction.timestamp >= since) & (Transaction.timestamp <= now)
        )
        return list((await db.execute(stmt)).all())

    async def _query_hourly_trend(self, db: AsyncSession) -> list[TrendPoint]:
        rows = await self._fetch_sales_since(db, 1)

        buckets = [SalesBucket() for _ in range(HOURS_PER_DAY)]
        for row in rows:
            buckets[self.clock.hour_of_day(row.timestamp)].add(row.total_amount)

        logger.info("dashboard.hourly_trend_computed", rows=len(rows))

        return [
            TrendPoint(
                name=self.clock.hour_label(hour),
                value=bucket.value,
                transactions=bucket.transactions,
            )
            for hour, bucket in enumerate(buckets)
        ]

    async def _query_daily_trend(self, db: AsyncSession, days: int) -> list[TrendPoint]:
        rows = await self._fetch_sales_since(db, days)

        buckets: dict[date, SalesBucket] = {}
        for row in rows:
            day = self.clock.day_key(row.timestamp)
            buckets.setdefault(day, SalesBucket()).add(row.total_amount)

        logger.info(
            "dashboard.daily_trend_computed",
            days=days,
            rows=len(rows),
            days_with_sales=len(buckets),
        )

        return [
            TrendPoint(
                name=self.clock.day_label(day),
                value=bucket.value,
                transactions=bucket.transactions,
            )
            for day, bucket in sorted(buckets.items())
        ]

    async def _query_geography(self, db: AsyncSession) -> list[RegionSummary]:
        window_days = self.settings.dashboard_geo_window_days
        since = self.clock.days_before(self.clock.now(), window_days)
        stmt = (
            select(Transaction.total_amount, Store.region, Store.city)
            .join(Store, Transaction.store_id == Store.id)
            .where(Transaction.timestamp >= since)
        )
        rows = (await db.execute(stmt)).all()

        buckets: dict[str, RegionBucket] = {}
        for row in rows:
            bucket = buckets.setdefault(row.region or UNKNOWN, RegionBucket())
            bucket.add(row.total_amount)
            if row.city:
                bucket.cities.add(row.city)

        logger.info(
            "dashboard.geography_computed",
            window_days=window_days,
            rows=len(rows),
            regions=len(buckets),
        )

        return [
            RegionSummary(
                region=region,
                value=bucket.value,
                transactions=bucket.transactions,
                growth=fallback.random_growth(self.rng),
                cities=sorted(bucket.cities),
            )
            for region, bucket in buckets.items()
        ]

    async def _query_products(self, db: AsyncSession, limit: int) -> list[ProductSummary]:
        row_cap = limit * self.settings.dashboard_product_overfetch_factor
        stmt = (
            select(
                TransactionItem.quantity,
                TransactionItem.total_price,
                Product.name,
                Product.category,
                Product.brand,
            )
            .join(Product, TransactionItem.product_id == Product.id)
            .order_by(TransactionItem.id.desc())
            .limit(row_cap)
        )
        rows = (await db.execute(stmt)).all()

        buckets: dict[str, ProductBucket] = {}
        for row in rows:
            bucket = buckets.get(row.name or UNKNOWN)
            if bucket is None:
                bucket = ProductBucket(
                    category=row.category or UNKNOWN,
                    brand=row.brand or UNKNOWN,
                )
                buckets[row.name or UNKNOWN] = bucket
            bucket.sales += _to_decimal(row.total_price)
            bucket.units += row.quantity or 0

        ranked = sorted(buckets.items(), key=lambda item: item[1].sales, reverse=True)

        logger.info(
            "dashboard.products_computed",
            limit=limit,
            row_cap=row_cap,
            rows=len(rows),
            products=len(buckets),
        )

        return [
            ProductSummary(
                name=name,
                sales=bucket.sales,
                units=bucket.units,
                category=bucket.category,
                brand=bucket.brand,
            )
            for name, bucket in ranked[:limit]
        ]
