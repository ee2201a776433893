# storefront/models/__init__.py

from .user import User
from .category import Category
from .product import Product, Package
from .order import Order, OrderItem
from .storage_record import StorageRecord
