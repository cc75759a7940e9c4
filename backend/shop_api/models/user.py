from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from shop_api.models.order import Order


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    first_name: str = Field(default="")
    last_name: str = Field(default="")

    # Relationships
    orders: List["Order"] = Relationship(back_populates="user")
