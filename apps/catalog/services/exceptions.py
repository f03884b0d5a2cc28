"""Domain-specific exceptions for catalog services."""

from apps.common.exceptions import NotFound, ValidationFailed


class ProductNotFoundError(NotFound):
    """Raised when a product does not exist."""
    default_detail = 'Product not found.'


class InvalidProductDataError(ValidationFailed):
    """Raised for a blank name, a bad price table or an empty update."""
    default_detail = 'Invalid product data.'


class ImportFormatError(ValidationFailed):
    """Raised when uploaded catalog content cannot be parsed."""
    default_detail = 'Could not parse the uploaded catalog.'
