"""
PATH: products/models/__init__.py

Catalog models export surface.
"""

from .phone import Phone
from .product import Product
from .service import Service

__all__ = [
    "Phone",
    "Product",
    "Service",
]
