"""
Rule-based entity configurations for the generated CRUD front-end.

Requirements are scanned for sentences of the form
``Product has fields: name, price, description.`` and each field gets a UI
type inferred from its name.
"""
import json
import re
from typing import Any, Dict, List

from protogen.generators.utils import capitalize_first

ENTITY_SENTENCE_RE = re.compile(r"([A-Z][a-zA-Z]*) has fields: ([^.]+)")

# Checked in order, first match wins
FIELD_TYPE_RULES = (
    ("email", ("email",)),
    ("password", ("password",)),
    ("tel", ("phone", "tel")),
    ("url", ("url", "website")),
    ("textarea", ("description", "notes", "comments", "address")),
    ("date", ("date", "time")),
    ("image", ("image", "photo", "picture", "avatar")),
    ("color", ("color",)),
    ("select", ("status", "type", "category")),
    ("number", (
        "price", "cost", "amount", "id", "number", "quantity", "count", "age",
        "score", "rating", "lat", "lng", "longitude", "latitude", "zip",
    )),
)
MONEY_HINTS = ("price", "cost", "amount")
DEFAULT_SELECT_OPTIONS = [
    {"value": "active", "label": "Active"},
    {"value": "inactive", "label": "Inactive"},
]
ITEMS_PER_PAGE = 10


def infer_field_type(field_name: str) -> str:
    name = field_name.lower()
    for field_type, hints in FIELD_TYPE_RULES:
        if any(hint in name for hint in hints):
            return field_type
    return "text"


def create_field_config(field_name: str) -> Dict[str, Any]:
    field_type = infer_field_type(field_name)
    config: Dict[str, Any] = {
        "name": field_name,
        "label": capitalize_first(field_name),
        "type": field_type,
        "required": True,
        "hideInTable": field_type in ("password", "textarea"),
    }
    if field_type == "select":
        config["options"] = [dict(o) for o in DEFAULT_SELECT_OPTIONS]
    if field_type == "number":
        config["min"] = 0
        if any(hint in field_name for hint in MONEY_HINTS):
            config["prefix"] = "$"
            config["step"] = 0.01
    return config


def extract_entities_from_requirements(requirements_text: str) -> List[Dict[str, Any]]:
    """Return `[{name, fields}]` for every "X has fields: a, b" sentence."""
    entities = []
    for match in ENTITY_SENTENCE_RE.finditer(requirements_text or ""):
        fields = [f.strip() for f in match.group(2).split(",") if f.strip()]
        entities.append({"name": match.group(1), "fields": fields})
    return entities


def extract_entity_names(requirements_text: str) -> List[str]:
    return [e["name"] for e in extract_entities_from_requirements(requirements_text)]


def default_entity_config(port: int = 3002, host: str = "localhost") -> Dict[str, Any]:
    return {
        "entityName": "items",
        "title": "Items",
        "apiBaseUrl": f"http://{host}:{port}",
        "itemsPerPage": ITEMS_PER_PAGE,
        "attributes": [
            {"name": "id", "label": "ID", "type": "number", "required": True, "hideInTable": False},
            {"name": "name", "label": "Name", "type": "text", "required": True, "hideInTable": False},
        ],
    }


def build_entity_configs(requirements_text: str, port: int = 3002, host: str = "localhost") -> List[Dict[str, Any]]:
    """Entity configs for every entity found, or the single `items` config."""
    entities = extract_entities_from_requirements(requirements_text)
    if not entities:
        return [default_entity_config(port, host)]
    return [
        {
            "entityName": f"{entity['name'].lower()}s",
            "title": entity["name"],
            "apiBaseUrl": f"http://{host}:{port}",
            "itemsPerPage": ITEMS_PER_PAGE,
            "attributes": [create_field_config(f) for f in entity["fields"]],
        }
        for entity in entities
    ]


# ============================================================
# JAVASCRIPT RENDERING
# ============================================================

def _js_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def render_attribute(attr: Dict[str, Any]) -> str:
    pairs = ", ".join(f"{key}: {_js_value(value)}" for key, value in attr.items())
    return f"    {{ {pairs} }}"


def render_entity_config(var_name: str, config: Dict[str, Any]) -> str:
    attributes = ",\n".join(render_attribute(a) for a in config["attributes"])
    return f"""const {var_name} = {{
  entityName: {_js_value(config['entityName'])},
  title: {_js_value(config['title'])},
  apiBaseUrl: {_js_value(config['apiBaseUrl'])},
  itemsPerPage: {config['itemsPerPage']},
  attributes: [
{attributes}
  ]
}};
"""


def render_entity_configs_js(configs: List[Dict[str, Any]], header: str = "// Generated entity configurations") -> str:
    """Render configs as `const xConfig = {...}` blocks plus `configuredEntities`."""
    blocks = []
    entries = []
    for config in configs:
        name = config["title"].lower()
        var_name = f"{name}Config"
        blocks.append(render_entity_config(var_name, config))
        entries.append(f"  {{ name: {_js_value(name)}, config: {var_name} }}")

    entries_js = ",\n".join(entries)
    return f"{header}\n\n" + "\n".join(blocks) + f"\nconst configuredEntities = [\n{entries_js}\n];\n"


def generate_entity_configs_code(requirements_text: str, port: int = 3002, host: str = "localhost") -> str:
    if not extract_entities_from_requirements(requirements_text):
        return render_entity_configs_js(
            [default_entity_config(port, host)],
            header="// Default entity configuration",
        )
    return render_entity_configs_js(build_entity_configs(requirements_text, port, host))
