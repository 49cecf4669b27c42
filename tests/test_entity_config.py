"""Tests for rule-based entity configurations."""
from protogen.generators.project.entity_config import (
    build_entity_configs,
    create_field_config,
    extract_entities_from_requirements,
    generate_entity_configs_code,
    infer_field_type,
)

REQUIREMENTS = """
An online shop.
Product has fields: name, price, description, status.
Customer has fields: email, phone, website, birthDate.
"""


def test_extract_entities_from_requirements():
    assert extract_entities_from_requirements(REQUIREMENTS) == [
        {"name": "Product", "fields": ["name", "price", "description", "status"]},
        {"name": "Customer", "fields": ["email", "phone", "website", "birthDate"]},
    ]


def test_extract_entities_without_matches():
    assert extract_entities_from_requirements("just some prose") == []
    assert extract_entities_from_requirements("") == []


def test_infer_field_type():
    assert infer_field_type("contactEmail") == "email"
    assert infer_field_type("password") == "password"
    assert infer_field_type("phone") == "tel"
    assert infer_field_type("website") == "url"
    assert infer_field_type("notes") == "textarea"
    assert infer_field_type("createdDate") == "date"
    assert infer_field_type("avatar") == "image"
    assert infer_field_type("color") == "color"
    assert infer_field_type("category") == "select"
    assert infer_field_type("quantity") == "number"
    assert infer_field_type("title") == "text"


def test_create_field_config_for_money():
    assert create_field_config("price") == {
        "name": "price",
        "label": "Price",
        "type": "number",
        "required": True,
        "hideInTable": False,
        "min": 0,
        "prefix": "$",
        "step": 0.01,
    }


def test_create_field_config_hides_long_text():
    config = create_field_config("description")
    assert config["type"] == "textarea"
    assert config["hideInTable"] is True


def test_build_entity_configs():
    configs = build_entity_configs(REQUIREMENTS, port=4000, host="example.test")

    assert [c["entityName"] for c in configs] == ["products", "customers"]
    product = configs[0]
    assert product["title"] == "Product"
    assert product["apiBaseUrl"] == "http://example.test:4000"
    assert product["itemsPerPage"] == 10
    status = next(a for a in product["attributes"] if a["name"] == "status")
    assert status["options"][0] == {"value": "active", "label": "Active"}


def test_build_entity_configs_defaults_to_items():
    configs = build_entity_configs("nothing structured here")
    assert len(configs) == 1
    assert configs[0]["entityName"] == "items"


def test_generate_entity_configs_code():
    code = generate_entity_configs_code(REQUIREMENTS)

    assert code.startswith("// Generated entity configurations")
    assert "const productConfig = {" in code
    assert "const customerConfig = {" in code
    assert "entityName: 'products'" in code
    assert "{ name: 'price', label: 'Price', type: 'number', required: true, hideInTable: false, min: 0, prefix: '$', step: 0.01 }" in code
    assert "{ name: 'product', config: productConfig }" in code
    assert "const configuredEntities = [" in code


def test_generate_entity_configs_code_default():
    code = generate_entity_configs_code("no entities", port=3010)
    assert code.startswith("// Default entity configuration")
    assert "const itemsConfig = {" in code
    assert "apiBaseUrl: 'http://localhost:3010'" in code
