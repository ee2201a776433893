from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, Relationship, SQLModel

from storefront.enums.role import Role

if TYPE_CHECKING:
    from storefront.models.order import Order

class User(SQLModel, table=True):
    __tablename__ = "tb_user"

    id: Optional[int] = Field(default=None, primary_key=True)

    name: Optional[str] = Field(default=None)
    email: str = Field(index=True, unique=True)
    password_hash: Optional[str] = Field(default=None)

    role: Role = Field(default=Role.USER)

    orders: List["Order"] = Relationship(back_populates="user")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
