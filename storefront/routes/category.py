from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from storefront.cache.cache import CacheManager
from storefront.core.middlewares.users import require_admin
from storefront.database.connection import get_session
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas.product import CategoryCreate, CategoryRead

db_session = get_session
cache_manager = CacheManager()


class CategoryRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/categories/", self.list_categories, methods=["GET"], response_model=List[CategoryRead])
        self.add_api_route("/admin/categories", self.create_category, methods=["POST"], response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
        self.add_api_route("/admin/categories/{category_id}", self.delete_category, methods=["DELETE"], response_model=dict)

    def list_categories(self, session: Session = Depends(db_session)):
        return session.exec(select(Category).order_by(Category.name)).all()

    def create_category(self, category_request: CategoryCreate, admin: dict = Depends(require_admin), session: Session = Depends(db_session)):
        if session.exec(select(Category).where(Category.slug == category_request.slug)).first():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category slug already exists")

        category = Category(**category_request.model_dump())
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    def delete_category(self, category_id: int, admin: dict = Depends(require_admin), session: Session = Depends(db_session)):
        category = session.get(Category, category_id)
        if not category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

        # Produtos ficam sem categoria
        for product in session.exec(select(Product).where(Product.category_id == category_id)).all():
            product.category_id = None
            session.add(product)

        session.delete(category)
        session.commit()
        cache_manager.invalidate_all()
        return {"message": "Category deleted"}
