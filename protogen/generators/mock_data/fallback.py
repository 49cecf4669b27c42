"""Deterministic placeholder records used when LLM output cannot be parsed."""
from datetime import date, datetime, timedelta
from typing import Any, Dict, List

from protogen.generators.types import Entity

BASE_DAY = date(2023, 1, 1)

STRING_TYPES = {"string"}
INTEGER_TYPES = {"integer", "int", "long"}
FLOAT_TYPES = {"float", "double", "decimal"}
BOOLEAN_TYPES = {"boolean"}
DATE_TYPES = {"date", "localdate"}
DATETIME_TYPES = {"instant", "zoneddatetime"}


def fallback_value(entity_name: str, field_name: str, field_type: str, index: int) -> Any:
    """Placeholder value for record `index` (1-based); unknown types become strings."""
    kind = (field_type or "").lower()
    day = BASE_DAY + timedelta(days=index - 1)

    if kind in STRING_TYPES:
        return f"{entity_name} {field_name} {index}"
    if kind in INTEGER_TYPES:
        return index * 10
    if kind in FLOAT_TYPES:
        return index * 10.5
    if kind in BOOLEAN_TYPES:
        return index % 2 == 0
    if kind in DATE_TYPES:
        return day.isoformat()
    if kind in DATETIME_TYPES:
        return datetime(day.year, day.month, day.day).isoformat(timespec="milliseconds") + "Z"
    return f"{field_name} {index}"


def generate_fallback_json(entities: List[Entity], records_per_entity: int = 10) -> Dict[str, List[Dict[str, Any]]]:
    """Build a db.json payload with exactly `records_per_entity` rows per entity."""
    result: Dict[str, List[Dict[str, Any]]] = {}

    for entity in entities:
        records = []
        for i in range(1, records_per_entity + 1):
            record: Dict[str, Any] = {"id": i}
            for f in entity.fields:
                record[f.name] = fallback_value(entity.name, f.name, f.type, i)
            records.append(record)
        result[entity.name] = records

    return result
