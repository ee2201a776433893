from datetime import datetime, timezone
from typing import Optional, List
import uuid
from sqlmodel import Field, Relationship, SQLModel

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.models.category import Category

class Product(SQLModel, table=True):
    __tablename__ = "tb_product"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: Optional[str] = Field(default=None, index=True)
    description: Optional[str] = None
    details: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    stock: int = Field(default=0, ge=0)

    # Caminho no bucket, não a URL completa
    image: Optional[str] = None

    # Ordem de exibição definida pelo admin
    sequence: int = Field(default=0, index=True)

    category_id: Optional[int] = Field(default=None, foreign_key="tb_category.id")
    category: Optional["Category"] = Relationship(back_populates="products")

    packages: List["Package"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Package.position"},
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = Field(default=None)

    @property
    def in_stock(self) -> bool:
        return (self.stock or 0) > 0


class Package(SQLModel, table=True):
    __tablename__ = "tb_package"

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    product_id: Optional[int] = Field(default=None, foreign_key="tb_product.id")
    name: str
    price: float = Field(default=0.0, ge=0)
    position: int = Field(default=0)

    product: Optional[Product] = Relationship(back_populates="packages")
