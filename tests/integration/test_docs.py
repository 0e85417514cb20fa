"""Integration tests for the generated OpenAPI documentation."""

import pytest
from drf_spectacular.generators import SchemaGenerator

pytestmark = pytest.mark.integration


@pytest.fixture()
def schema():
    return SchemaGenerator().get_schema(request=None, public=True)


class TestOpenApiSchema:
    def test_every_routed_path_and_method_is_documented(self, schema):
        paths = schema["paths"]
        assert set(paths["/api/products"].keys()) >= {"get", "post"}
        assert set(paths["/api/products/{id}"].keys()) >= {
            "get",
            "put",
            "patch",
            "delete",
        }

    def test_id_parameter_is_integer(self, schema):
        parameters = schema["paths"]["/api/products/{id}"]["get"]["parameters"]
        id_param = next(p for p in parameters if p["name"] == "id")
        assert id_param["in"] == "path"
        assert id_param["schema"]["type"] == "integer"

    def test_operations_are_tagged(self, schema):
        for operation in schema["paths"]["/api/products"].values():
            assert operation["tags"] == ["Products"]

    def test_create_documents_201_and_400(self, schema):
        responses = schema["paths"]["/api/products"]["post"]["responses"]
        assert "201" in responses
        assert "400" in responses

    def test_title(self, schema):
        assert schema["info"]["title"] == "REST API with Django REST Framework"


class TestDocsEndpoints:
    def test_schema_endpoint(self, client):
        response = client.get("/docs/schema/", HTTP_ACCEPT="application/json")
        assert response.status_code == 200

    def test_swagger_ui(self, client):
        response = client.get("/docs/")
        assert response.status_code == 200
