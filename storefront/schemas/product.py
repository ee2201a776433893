from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class PackageBase(BaseModel):
    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)


class PackageCreate(PackageBase):
    id: Optional[str] = None


class PackageRead(PackageBase):
    id: str

    class Config:
        from_attributes = True


class CategoryRead(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None

    class Config:
        from_attributes = True


class ProductBase(BaseModel):
    name: str = Field(..., max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    details: Optional[str] = None
    price: float = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    image: Optional[str] = None
    category_id: Optional[int] = None


class ProductCreate(ProductBase):
    packages: List[PackageCreate] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    details: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    image: Optional[str] = None
    category_id: Optional[int] = None
    packages: Optional[List[PackageCreate]] = None


class ProductRead(ProductBase):
    id: int
    sequence: int = 0
    in_stock: bool = False
    image_url: Optional[str] = None
    category: Optional[CategoryRead] = None
    packages: List[PackageRead] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminProductPage(BaseModel):
    products: List[ProductRead]
    page: int
    total_pages: int


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None
