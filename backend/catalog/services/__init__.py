# Services package
#
# This package provides the product catalog services.
#
# Module structure:
# - product_service.py: Operations behind the routes (list/get/create/update/delete)
# - product_repository.py: MongoDB collection access, owner-scoped
# - product_filters.py: Filter/sort construction and pagination math
# - validators.py: Request body validation gate
# - auth.py: Bearer token authentication
#
#   from catalog.services import ProductService

from .product_service import ProductService
from .product_repository import ProductRepository
from . import product_filters
from . import validators

__all__ = [
    'ProductService',
    'ProductRepository',
    'product_filters',
    'validators',
]
