import logging
import math
from datetime import datetime, timezone
from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlalchemy import update
from sqlmodel import Session, func, select

from storefront.cache.cache import CacheManager, to_product_read
from storefront.configuration.settings import Configuration
from storefront.core.middlewares.users import require_admin
from storefront.database.connection import get_session
from storefront.models.category import Category
from storefront.models.product import Package, Product
from storefront.schemas.product import AdminProductPage, PackageCreate, ProductCreate, ProductRead, ProductUpdate
from storefront.schemas.reorder import SequenceAssignment
from storefront.storage.bucket import BucketError, BucketService, get_bucket_service

configuration = Configuration()
db_session = get_session
cache_manager = CacheManager()


def sync_packages(product: Product, packages: List[PackageCreate]) -> None:
    existing = {pkg.id: pkg for pkg in product.packages}
    synced = []
    for position, data in enumerate(packages):
        package = existing.get(data.id) if data.id else None
        if package is None:
            package = Package(name=data.name, price=data.price, position=position)
            if data.id:
                package.id = data.id
        else:
            package.name = data.name
            package.price = data.price
            package.position = position
        synced.append(package)
    product.packages = synced


class AdminProductRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/admin/products", self.list_products, methods=["GET"], response_model=AdminProductPage)
        self.add_api_route("/admin/products", self.create_product, methods=["POST"], response_model=ProductRead, status_code=status.HTTP_201_CREATED)
        self.add_api_route("/admin/products/reorder", self.reorder_products, methods=["POST"], response_model=dict)
        self.add_api_route("/admin/products/{product_id}", self.update_product, methods=["PUT"], response_model=ProductRead)
        self.add_api_route("/admin/products/{product_id}", self.delete_product, methods=["DELETE"], response_model=dict)

    def list_products(
        self,
        page: int = Query(1, ge=1),
        page_size: Optional[int] = Query(None, ge=1, le=100),
        admin: dict = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        page_size = page_size or configuration.admin_page_size
        total = session.exec(select(func.count()).select_from(Product)).one()
        total_pages = max(1, math.ceil(total / page_size))

        products = session.exec(
            select(Product)
            .options(selectinload(Product.packages), selectinload(Product.category))
            .order_by(Product.sequence, Product.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        ).all()

        return AdminProductPage(
            products=[to_product_read(p) for p in products],
            page=page,
            total_pages=total_pages,
        )

    def create_product(
        self,
        product_data: ProductCreate,
        admin: dict = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        if product_data.category_id and not session.get(Category, product_data.category_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category not found")

        # Novos produtos vão para o fim da lista
        last_sequence = session.exec(select(func.max(Product.sequence))).one()
        product = Product(
            **product_data.model_dump(exclude={"packages"}),
            sequence=(last_sequence + 1) if last_sequence is not None else 0,
        )
        sync_packages(product, product_data.packages)

        session.add(product)
        session.commit()
        session.refresh(product)
        cache_manager.invalidate()

        logging.info(f"PRODUTO >>> Produto criado: {product.id} - {product.name}")
        return to_product_read(product)

    def update_product(
        self,
        product_id: int,
        product_update: ProductUpdate,
        admin: dict = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        product = session.get(Product, product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

        data = product_update.model_dump(exclude_unset=True, exclude={"packages"})
        if data.get("category_id") and not session.get(Category, data["category_id"]):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category not found")

        for key, value in data.items():
            setattr(product, key, value)

        # Pacotes são substituídos por completo
        if product_update.packages is not None:
            sync_packages(product, product_update.packages)

        product.updated_at = datetime.now(timezone.utc)
        session.add(product)
        session.commit()
        session.refresh(product)
        cache_manager.invalidate()
        return to_product_read(product)

    def delete_product(
        self,
        product_id: int,
        admin: dict = Depends(require_admin),
        session: Session = Depends(db_session),
        bucket: BucketService = Depends(get_bucket_service),
    ):
        product = session.get(Product, product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

        image = product.image
        session.delete(product)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Product is referenced by existing orders")
        cache_manager.invalidate()

        if image:
            try:
                bucket.delete_file(image)
            except BucketError as e:
                logging.warning(f"Não foi possível deletar imagem do produto {product_id}: {str(e)}")

        return {"message": f"Product {product_id} deleted"}

    def reorder_products(
        self,
        body: Any = Body(...),
        admin: dict = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        products = body.get("products") if isinstance(body, dict) else None
        if not isinstance(products, list):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")

        try:
            assignments = [SequenceAssignment.model_validate(p) for p in products]
        except ValidationError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")

        # Tudo ou nada: um único commit para o lote inteiro
        try:
            for assignment in assignments:
                session.exec(
                    update(Product)
                    .where(Product.id == assignment.id)
                    .values(sequence=assignment.sequence, updated_at=datetime.now(timezone.utc))
                )
            session.commit()
        except Exception as e:
            session.rollback()
            logging.error(f"REORDENAÇÃO >>> Erro ao reordenar produtos: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")

        cache_manager.invalidate()
        logging.info(f"REORDENAÇÃO >>> {len(assignments)} produtos reordenados")
        return {"message": "Products reordered successfully"}
