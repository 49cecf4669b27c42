"""The published OpenAPI document must be valid and list every endpoint."""
from openapi_spec_validator import validate

from protogen.main import app


def test_openapi_document_is_valid():
    spec = app.openapi()
    validate(spec)

    paths = spec["paths"]
    for path in (
        "/api/generate/code",
        "/api/validate/content",
        "/api/research/topic",
        "/api/summarize",
        "/api/derive/insights",
        "/api/generate/svg",
        "/api/generate/jdl",
        "/api/generate/jdl-to-json",
        "/api/generate/prototype-builder",
        "/api/generate/prototype-json-server/start/{name}",
        "/api/generate/project",
        "/api/generate/project/{project_name}/mock-data",
        "/api/generate/requirements/structured",
        "/api/generate/api-js",
    ):
        assert path in paths, f"{path} missing from OpenAPI document"


def test_request_bodies_use_camel_case():
    schemas = app.openapi()["components"]["schemas"]
    assert "maxTokens" in schemas["CodeGenerationRequest"]["properties"]
    assert "useLLM" in schemas["ProjectRequest"]["properties"]
