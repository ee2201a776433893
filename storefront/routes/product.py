# storefront/routes/product.py
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from storefront.cache.cache import CacheManager, to_product_read
from storefront.database.connection import get_session
from storefront.models.product import Product
from storefront.schemas.product import ProductRead

db_session = get_session

cache_manager = CacheManager()


class ProductRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/products/", self.list_products, methods=["GET"], response_model=List[ProductRead])
        self.add_api_route("/products/{product_id}", self.get_product, methods=["GET"], response_model=ProductRead)

    def list_products(self, session: Session = Depends(db_session)):
        """Lista todos os produtos (usando cache)"""
        try:
            return cache_manager.get_products_data(session)
        except Exception as e:
            logging.error(f"Erro ao listar produtos: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal Server Error"
            )

    def get_product(self, product_id: int, session: Session = Depends(db_session)):
        product = session.get(Product, product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        return to_product_read(product)
