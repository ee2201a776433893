# storefront/cache/cache.py
import logging
from typing import List, Optional
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from storefront.models.product import Product
from storefront.schemas.product import ProductRead
from storefront.storage.bucket import resolve_public_url
from storefront.utils.cache import DataCache

cache = DataCache()

PRODUCTS_KEY = "product_data"


def to_product_read(product: Product) -> ProductRead:
    data = ProductRead.model_validate(product)
    data.image_url = resolve_public_url(product.image)
    return data


def sort_products(products: List[Product]) -> List[Product]:
    # created_at desc vem do banco; a sequência do admin prevalece
    return sorted(products, key=lambda p: p.sequence or 0)


class CacheManager:
    _cache_key_prefix = "main_data_"

    def __init__(self, data_cache: Optional[DataCache] = None):
        self.cache = data_cache or cache

    def get_cache_key(self, key: str) -> str:
        """Gera a chave de cache completa com o prefixo"""
        return f"{self._cache_key_prefix}{key}"

    def load_cached_data(self, key: str):
        cache_key = self.get_cache_key(key)
        cached_data = self.cache.get(cache_key)
        if cached_data is not None:
            logging.info(f"Dados encontrados no cache para a chave: {cache_key}")
        return cached_data

    def cache_data(self, key: str, data) -> None:
        cache_key = self.get_cache_key(key)
        self.cache.set(cache_key, data, ttl=900)
        logging.info(f"Dados armazenados no cache com a chave: {cache_key}")

    def invalidate(self, key: str = PRODUCTS_KEY) -> None:
        self.cache.clear(self.get_cache_key(key))

    def invalidate_all(self) -> None:
        removed = self.cache.clear_prefix(self._cache_key_prefix)
        logging.info(f"Cache limpo: {removed} chave(s)")

    def get_products_data(self, session: Session) -> List[dict]:
        """Lista de produtos com categoria e pacotes, ordenada pela sequência."""
        cached = self.load_cached_data(PRODUCTS_KEY)
        if cached is not None:
            return cached

        products = session.exec(
            select(Product)
            .options(selectinload(Product.packages), selectinload(Product.category))
            .order_by(Product.created_at.desc())
        ).all()

        data = [to_product_read(p).model_dump(mode="json") for p in sort_products(products)]
        self.cache_data(PRODUCTS_KEY, data)
        return data
