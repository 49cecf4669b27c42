from protogen.generators.mock_data.fallback import generate_fallback_json
from protogen.generators.mock_data.faker_data import generate_mock_data, generate_value

__all__ = ["generate_fallback_json", "generate_mock_data", "generate_value"]
