from storefront.fetchers.products import ProductFetcher, ProductPage, sort_by_sequence
from storefront.fetchers.orders import OrderFetcher

__all__ = ["ProductFetcher", "ProductPage", "sort_by_sequence", "OrderFetcher"]
