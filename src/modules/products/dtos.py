"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for a full product update.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``available`` is not accepted here: new products always start
    available.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: float

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Name must not be empty.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


class UpdateProductDTO(CreateProductDTO):
    """Immutable DTO for full (PUT) product updates.

    All three fields are required and overwrite the stored values.
    """

    available: StrictBool
