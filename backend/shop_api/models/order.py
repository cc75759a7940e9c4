from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from shop_api.models.product import Product
    from shop_api.models.user import User


class Order(SQLModel, table=True):
    """A user's order of a single product. Persisted only; no routes expose it yet."""

    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    product_id: int = Field(foreign_key="products.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    # Relationships
    product: "Product" = Relationship(back_populates="orders")
    user: "User" = Relationship(back_populates="orders")
