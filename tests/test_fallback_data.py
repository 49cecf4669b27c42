"""Tests for deterministic fallback db.json records."""
from protogen.generators.jdl.parser import parse_jdl
from protogen.generators.mock_data.fallback import fallback_value, generate_fallback_json

JDL = """
entity Product {
  name String,
  stock Integer,
  price BigDecimal,
  weight Double,
  active Boolean,
  releaseDate LocalDate,
  createdAt Instant
}
"""


def test_generate_fallback_json_record_count_and_ids():
    data = generate_fallback_json(parse_jdl(JDL), records_per_entity=3)

    assert list(data) == ["Product"]
    assert [r["id"] for r in data["Product"]] == [1, 2, 3]


def test_generate_fallback_json_values_by_type():
    second = generate_fallback_json(parse_jdl(JDL), records_per_entity=2)["Product"][1]

    assert second["name"] == "Product name 2"
    assert second["stock"] == 20
    assert second["weight"] == 21.0
    assert second["active"] is True
    assert second["releaseDate"] == "2023-01-02"
    assert second["createdAt"] == "2023-01-02T00:00:00.000Z"
    # BigDecimal is not a known type
    assert second["price"] == "price 2"


def test_fallback_value_is_case_insensitive():
    assert fallback_value("Order", "total", "DECIMAL", 1) == 10.5
    assert fallback_value("Order", "flag", "boolean", 1) is False
