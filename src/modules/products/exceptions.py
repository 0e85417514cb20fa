"""Product domain exceptions.

Raised by the Service Layer; translated into HTTP responses by
``modules.core.exceptions.api_exception_handler``.
"""

from __future__ import annotations

from modules.core.exceptions import ResourceNotFound


class ProductNotFound(ResourceNotFound):
    """The requested product does not exist."""

    default_message = "Product not found"
