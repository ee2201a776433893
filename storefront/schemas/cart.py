from typing import List, Optional
from pydantic import BaseModel, Field, conint


class CartPackage(BaseModel):
    id: str
    name: str
    price: float


class CartProduct(BaseModel):
    """Dados do produto necessários para montar um item do carrinho."""
    id: str
    name: str
    description: str = ""
    price: float
    image: str = ""
    category: str = ""
    packages: List[CartPackage] = Field(default_factory=list)


class CartItem(BaseModel):
    id: str
    name: str
    description: str = ""
    price: float
    quantity: int = 1
    image: str = ""
    category: str = ""
    packages: List[CartPackage] = Field(default_factory=list)
    selected_package: str = ""
    total_price: float = 0.0


class CartRead(BaseModel):
    items: List[CartItem] = []
    total: float
    count: int


class CartItemCreate(BaseModel):
    product_id: int
    quantity: conint(ge=1) = 1 # type: ignore
    selected_package: Optional[str] = ""


class CartQuantityUpdate(BaseModel):
    quantity: int


class CartPackageUpdate(BaseModel):
    package_id: str
