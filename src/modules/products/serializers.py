"""Product DRF serializers.

Input serializers are the per-route validation chains: each field runs
an ordered list of ``Rule`` validators against the raw value and
reports every failing rule, not just the first.  The Service Layer never
sees these serializers; views turn ``validated_data`` into the pydantic
DTOs from ``dtos.py``.

Output serializers shape the ``{"data": ...}`` envelope and double as
the OpenAPI response components.
"""

from __future__ import annotations

from typing import Any, Dict, List

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field, extend_schema_serializer
from rest_framework import serializers
from rest_framework.fields import empty

from modules.products.constants import (
    AVAILABLE_INVALID,
    ID_INVALID,
    NAME_REQUIRED,
    PRICE_INVALID,
    PRICE_INVALID_VALUE,
    PRICE_REQUIRED,
    PRODUCT_DELETED,
)
from modules.products.models import Product
from modules.products.validators import (
    Rule,
    is_boolean,
    is_int,
    is_not_empty,
    is_numeric,
    is_positive,
    to_boolean,
)

# ---------------------------------------------------------------------------
# Rule-chain fields
# ---------------------------------------------------------------------------


class ChainField(serializers.Field):
    """Field that hands the raw value, missing or not, to every validator.

    DRF normally short-circuits missing input with a single "required"
    error; here a missing value is passed on as ``None`` so each rule in
    ``default_validators`` reports its own message.
    """

    def validate_empty_values(self, data: Any):
        if data is empty:
            data = None
        return (False, data)

    def to_internal_value(self, data: Any) -> Any:
        return data

    def to_representation(self, value: Any) -> Any:
        return value


@extend_schema_field(OpenApiTypes.INT)
class IdField(ChainField):
    default_validators = [Rule(is_int, ID_INVALID)]


@extend_schema_field({"type": "string", "example": "Monitor curvo de 24 pulgadas"})
class NameField(ChainField):
    default_validators = [Rule(is_not_empty, NAME_REQUIRED)]


@extend_schema_field({"type": "number", "example": 300})
class PriceField(ChainField):
    default_validators = [
        Rule(is_numeric, PRICE_INVALID_VALUE),
        Rule(is_not_empty, PRICE_REQUIRED),
        Rule(is_positive, PRICE_INVALID),
    ]


@extend_schema_field({"type": "boolean", "example": True})
class AvailableField(ChainField):
    default_validators = [Rule(is_boolean, AVAILABLE_INVALID)]


def flatten_errors(errors: Dict[str, Any]) -> List[Dict[str, str]]:
    """Turn ``serializer.errors`` into ``[{"field": ..., "message": ...}]``."""
    flat: List[Dict[str, str]] = []
    for field, messages in errors.items():
        if not isinstance(messages, (list, tuple)):
            messages = [messages]
        for message in messages:
            flat.append({"field": field, "message": str(message)})
    return flat


# ---------------------------------------------------------------------------
# Input (validation chains)
# ---------------------------------------------------------------------------


class ProductLookupSerializer(serializers.Serializer):
    """Path parameters of id-addressed routes."""

    id = IdField()

    def validate_id(self, value: Any) -> int:
        return int(value)


class ProductCreateSerializer(serializers.Serializer):
    """Body of ``POST /api/products``."""

    name = NameField()
    price = PriceField()

    def validate_name(self, value: Any) -> str:
        return str(value)

    def validate_price(self, value: Any) -> float:
        return float(value)


class ProductUpdateSerializer(ProductCreateSerializer):
    """Body of ``PUT /api/products/{id}``: every field is required."""

    available = AvailableField()

    def validate_available(self, value: Any) -> bool:
        return to_boolean(value)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@extend_schema_field(OpenApiTypes.NUMBER)
class PriceOutputField(serializers.FloatField):
    """Renders integral prices as JSON integers: ``300``, not ``300.0``."""

    def to_representation(self, value: Any) -> Any:
        number = super().to_representation(value)
        if number.is_integer() and abs(number) < 2**53:
            return int(number)
        return number


class ProductSerializer(serializers.ModelSerializer):
    """Public representation of a Product (audit timestamps excluded)."""

    price = PriceOutputField(read_only=True)

    class Meta:
        model = Product
        fields = ["id", "name", "price", "available"]
        read_only_fields = fields


class ProductEnvelopeSerializer(serializers.Serializer):
    data = ProductSerializer()


@extend_schema_serializer(many=False)
class ProductListEnvelopeSerializer(serializers.Serializer):
    data = ProductSerializer(many=True)


class MessageEnvelopeSerializer(serializers.Serializer):
    data = serializers.CharField(default=PRODUCT_DELETED)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()


class FieldErrorSerializer(serializers.Serializer):
    field = serializers.CharField()
    message = serializers.CharField()


class ValidationErrorSerializer(serializers.Serializer):
    errors = FieldErrorSerializer(many=True)
