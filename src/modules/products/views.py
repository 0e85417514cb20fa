"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Each
action declares its validation chain (``validation_chains``); the chain
runs in ``initial()``, before the handler, and any failure aborts the
request with ``ValidationFailed``.  Handlers only deal with the success
path: domain exceptions propagate to the central
``api_exception_handler``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Type

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ValidationFailed
from modules.products.constants import PRODUCT_DELETED
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ErrorSerializer,
    MessageEnvelopeSerializer,
    ProductCreateSerializer,
    ProductEnvelopeSerializer,
    ProductListEnvelopeSerializer,
    ProductLookupSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
    ValidationErrorSerializer,
    flatten_errors,
)
from modules.products.services import ProductService

ID_PARAMETER = OpenApiParameter(
    name="id",
    type=OpenApiTypes.INT,
    location=OpenApiParameter.PATH,
    description="The id of the product",
)

NOT_FOUND = {404: ErrorSerializer}
BAD_REQUEST = {400: ValidationErrorSerializer}

# (path serializer, body serializer) per action
ValidationChain = Tuple[
    Optional[Type[serializers.Serializer]], Optional[Type[serializers.Serializer]]
]


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``repository_class`` (DIP); swap the
    class attribute to run the views against a test double.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    lookup_url_kwarg = "id"
    # Any path segment reaches the validation chain.
    lookup_value_regex = "[^/]+"
    repository_class = ProductDjangoRepository

    validation_chains: Dict[str, ValidationChain] = {
        "list": (None, None),
        "create": (None, ProductCreateSerializer),
        "retrieve": (ProductLookupSerializer, None),
        "update": (ProductLookupSerializer, ProductUpdateSerializer),
        "toggle_availability": (ProductLookupSerializer, None),
        "destroy": (ProductLookupSerializer, None),
    }

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=self.repository_class())
        self.product_id: Optional[int] = None
        self.validated_data: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        self.run_validation_chain(request, kwargs)

    def run_validation_chain(self, request: Request, kwargs: Dict[str, Any]) -> None:
        path_serializer_class, body_serializer_class = self.validation_chains.get(
            self.action, (None, None)
        )
        errors: List[Dict[str, str]] = []

        if path_serializer_class is not None:
            path = path_serializer_class(data=kwargs)
            if path.is_valid():
                self.product_id = path.validated_data["id"]
            else:
                errors.extend(flatten_errors(path.errors))

        if body_serializer_class is not None:
            body = body_serializer_class(data=request.data)
            if body.is_valid():
                self.validated_data = dict(body.validated_data)
            else:
                errors.extend(flatten_errors(body.errors))

        if errors:
            raise ValidationFailed(errors)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    @extend_schema(
        tags=["Products"],
        summary="Get a list of all the products",
        description="Returns the list of all the products, newest first",
        responses={200: ProductListEnvelopeSerializer},
    )
    def list(self, request: Request) -> Response:
        """GET /api/products"""
        products = self._service.list_products()
        return Response({"data": ProductSerializer(products, many=True).data})

    @extend_schema(
        tags=["Products"],
        summary="Get a product by id",
        description="Returns a product based on its unique id",
        parameters=[ID_PARAMETER],
        responses={200: ProductEnvelopeSerializer, **BAD_REQUEST, **NOT_FOUND},
    )
    def retrieve(self, request: Request, id: str | None = None) -> Response:
        """GET /api/products/{id}"""
        product = self._service.get_product(self.product_id)
        return Response({"data": ProductSerializer(product).data})

    @extend_schema(
        tags=["Products"],
        summary="Create a new product",
        description="Returns a new record in the database",
        request=ProductCreateSerializer,
        responses={201: ProductEnvelopeSerializer, **BAD_REQUEST},
    )
    def create(self, request: Request) -> Response:
        """POST /api/products"""
        dto = CreateProductDTO(**self.validated_data)
        product = self._service.create_product(dto)
        return Response(
            {"data": ProductSerializer(product).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        tags=["Products"],
        summary="Update a product with user data",
        description="Returns the updated product",
        parameters=[ID_PARAMETER],
        request=ProductUpdateSerializer,
        responses={200: ProductEnvelopeSerializer, **BAD_REQUEST, **NOT_FOUND},
    )
    def update(self, request: Request, id: str | None = None) -> Response:
        """PUT /api/products/{id}"""
        dto = UpdateProductDTO(**self.validated_data)
        product = self._service.update_product(self.product_id, dto)
        return Response({"data": ProductSerializer(product).data})

    @extend_schema(
        tags=["Products"],
        summary="Update product availability",
        description="Flips the availability of the product and returns it",
        parameters=[ID_PARAMETER],
        request=None,
        responses={200: ProductEnvelopeSerializer, **BAD_REQUEST, **NOT_FOUND},
    )
    def toggle_availability(self, request: Request, id: str | None = None) -> Response:
        """PATCH /api/products/{id}"""
        product = self._service.toggle_availability(self.product_id)
        return Response({"data": ProductSerializer(product).data})

    @extend_schema(
        tags=["Products"],
        summary="Deletes a product by a given ID",
        description="Returns a confirmation message",
        parameters=[ID_PARAMETER],
        responses={200: MessageEnvelopeSerializer, **BAD_REQUEST, **NOT_FOUND},
    )
    def destroy(self, request: Request, id: str | None = None) -> Response:
        """DELETE /api/products/{id}"""
        self._service.delete_product(self.product_id)
        return Response({"data": PRODUCT_DELETED})
