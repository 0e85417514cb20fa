"""Product API constants: client-facing messages."""

ID_INVALID = "ID no válido"
NAME_REQUIRED = "El nombre del producto es obligatorio"
PRICE_INVALID_VALUE = "Valor no válido"
PRICE_REQUIRED = "El precio es obligatorio"
PRICE_INVALID = "Precio no válido"
AVAILABLE_INVALID = "Valor para disponible no válido"

PRODUCT_DELETED = "Product deleted"
