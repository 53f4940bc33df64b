"""Data platform feature: read-only models for the POS transaction store.

- Dimension tables: Store, Product
- Fact tables: Transaction, TransactionItem
"""

from app.features.data_platform.models import (
    Product,
    Store,
    Transaction,
    TransactionItem,
)

__all__ = [
    "Product",
    "Store",
    "Transaction",
    "TransactionItem",
]
