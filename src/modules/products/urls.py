"""Product URL configuration.

The route table is static: one list route and one detail route, each
mapping HTTP methods to ``ProductViewSet`` handlers.  No trailing slash.
"""

from __future__ import annotations

from rest_framework.routers import Route, SimpleRouter

from modules.products.views import ProductViewSet


class ProductRouter(SimpleRouter):
    routes = [
        Route(
            url=r"^{prefix}{trailing_slash}$",
            mapping={"get": "list", "post": "create"},
            name="{basename}-list",
            detail=False,
            initkwargs={"suffix": "List"},
        ),
        Route(
            url=r"^{prefix}/{lookup}{trailing_slash}$",
            mapping={
                "get": "retrieve",
                "put": "update",
                "patch": "toggle_availability",
                "delete": "destroy",
            },
            name="{basename}-detail",
            detail=True,
            initkwargs={"suffix": "Instance"},
        ),
    ]


router = ProductRouter(trailing_slash=False)
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls
