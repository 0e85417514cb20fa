"""Product model.

Business rules implemented:
- Name is unbounded text; the validation chain rejects empty names.
- Price must be greater than zero (validated on input and enforced by a
  CHECK constraint).
- ``available`` is never NULL and defaults to ``True``.
- ``created_at`` / ``updated_at`` are store-managed and never exposed by
  the API.
"""

from __future__ import annotations

from django.db import models


class Product(models.Model):
    """The sole entity of the catalog."""

    name = models.TextField()
    price = models.FloatField()
    available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Domain behaviour
    # ------------------------------------------------------------------

    def toggle_availability(self) -> bool:
        """Flip ``available`` and return the new value."""
        self.available = not self.available
        return self.available

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.pk} - {self.name}"
