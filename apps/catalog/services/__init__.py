"""Catalog app services layer: pricing, product management, import."""

from .exceptions import (
    ProductNotFoundError,
    InvalidProductDataError,
    ImportFormatError,
)
from .pricing import price_for
from .product_management import (
    ProductPatch,
    clean_prices,
    get_product,
    list_products,
    create_product,
    update_product,
    deactivate_product,
)
from .importer import (
    ImportResult,
    import_products_csv,
    import_products_multirow,
)

__all__ = [
    # Exceptions
    'ProductNotFoundError',
    'InvalidProductDataError',
    'ImportFormatError',
    # Pricing
    'price_for',
    # Product management
    'ProductPatch',
    'clean_prices',
    'get_product',
    'list_products',
    'create_product',
    'update_product',
    'deactivate_product',
    # Import
    'ImportResult',
    'import_products_csv',
    'import_products_multirow',
]
