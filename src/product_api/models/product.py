"""Product model for database representation."""

from dataclasses import dataclass
from decimal import MAX_PREC, Context, Decimal
from typing import Any, Optional

PRICE_PRECISION = Decimal("0.01")

# Wide enough to quantize any REAL SQLite can hold
_PRICE_CONTEXT = Context(prec=MAX_PREC)


@dataclass
class Product:
    """Product data model representing a row of the Products table."""

    id: int
    name: str
    description: Optional[str]
    price: Decimal
    category: str


def _to_price(value: Any) -> Optional[Decimal]:
    # SQLite hands DECIMAL columns back as float, int or text
    if value is None:
        return None
    price = Decimal(str(value))
    if not price.is_finite():
        return price
    return price.quantize(PRICE_PRECISION, context=_PRICE_CONTEXT)


def product_from_row(row) -> Product:
    """Map a Products row (sqlite3.Row or mapping) onto a Product, column by column."""
    return Product(
        id=row["Id"],
        name=row["Name"],
        description=row["Description"],
        price=_to_price(row["Price"]),
        category=row["Category"],
    )
