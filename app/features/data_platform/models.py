"""Data platform ORM models for the point-of-sale transaction store.

The dashboard reads these tables row by row:
- Dimensions: Store, Product
- Facts: Transaction (one row per receipt), TransactionItem (one row per line)

The tables are owned by the POS ingestion side; this service never writes
to them.
"""

import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

# ============================================================================
# DIMENSION TABLES
# ============================================================================


class Store(Base):
    """Store (outlet) dimension table.

    Attributes:
        id: Primary key.
        code: Unique store code (e.g., "S001").
        name: Store display name.
        is_active: Whether the outlet is currently trading.
        region: Geographic region (e.g., "NCR").
        city: City or municipality.
    """

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    region: Mapped[str | None] = mapped_column(String(100), index=True, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    transactions: Mapped[list["Transaction"]] = relationship(back_populates="store")


class Product(Base):
    """Product (SKU) dimension table.

    Attributes:
        id: Primary key.
        sku: Stock keeping unit.
        name: Product display name.
        category: Product category.
        brand: Product brand.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sku: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), index=True, nullable=True)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)

    transaction_items: Mapped[list["TransactionItem"]] = relationship(back_populates="product")


# ============================================================================
# FACT TABLES
# ============================================================================


class Transaction(Base):
    """Sales transaction (receipt) fact table.

    Attributes:
        id: Primary key.
        store_id: Store where the sale happened (FK).
        timestamp: Instant of the sale, stored with time zone.
        total_amount: Receipt total in local currency.
        items_count: Number of units on the receipt.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(Integer, ForeignKey("stores.id"), index=True)
    timestamp: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), index=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    items_count: Mapped[int] = mapped_column(Integer, default=0)

    store: Mapped["Store"] = relationship(back_populates="transactions")
    items: Mapped[list["TransactionItem"]] = relationship(back_populates="transaction")

    __table_args__ = (
        Index("ix_transactions_timestamp_store", "timestamp", "store_id"),
        CheckConstraint("total_amount >= 0", name="ck_transactions_amount_positive"),
        CheckConstraint("items_count >= 0", name="ck_transactions_items_positive"),
    )


class TransactionItem(Base):
    """Transaction line fact table.

    Attributes:
        id: Primary key.
        transaction_id: Owning receipt (FK).
        product_id: Product sold (FK).
        quantity: Units sold on this line.
        total_price: Line total (quantity * unit price, after discounts).
    """

    __tablename__ = "transaction_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    transaction_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("transactions.id", ondelete="CASCADE"), index=True
    )
    product_id: Mapped[int] = mapped_column(Integer, ForeignKey("products.id"), index=True)
    quantity: Mapped[int] = mapped_column(Integer)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2))

    transaction: Mapped["Transaction"] = relationship(back_populates="items")
    product: Mapped["Product"] = relationship(back_populates="transaction_items")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_transaction_items_quantity_positive"),
        CheckConstraint("total_price >= 0", name="ck_transaction_items_price_positive"),
    )
