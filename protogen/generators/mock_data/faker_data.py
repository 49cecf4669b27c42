"""Faker-backed mock records for UI entity configurations."""
import logging
from typing import Any, Dict, List, Optional

from faker import Faker

log = logging.getLogger(__name__)

DEFAULT_COUNT = 25


def _number(fake: Faker, attr: Dict[str, Any]) -> Any:
    name = attr["name"].lower()
    low = attr.get("min") if attr.get("min") is not None else 0
    high = attr.get("max") if attr.get("max") is not None else 1000

    if any(k in name for k in ("price", "amount", "salary")):
        return round(fake.pyfloat(min_value=low, max_value=high, right_digits=2), 2)
    if "quantity" in name or "stock" in name:
        return fake.random_int(min=low, max=max(low, min(high, 100)))
    if "age" in name:
        return fake.random_int(min=18, max=80)
    return fake.random_int(min=low, max=high)


def _date(fake: Faker, attr: Dict[str, Any]) -> str:
    name = attr["name"].lower()
    if "hire" in name:
        value = fake.date_between(start_date="-5y", end_date="today")
    elif "added" in name:
        value = fake.date_between(start_date="-1y", end_date="today")
    elif "order" in name:
        value = fake.date_between(start_date="-30d", end_date="today")
    else:
        value = fake.date_between(start_date="-90d", end_date="today")
    return value.isoformat()


def generate_value(fake: Faker, attr: Dict[str, Any]) -> Any:
    """Generate one value for an entity-config attribute based on its UI type."""
    attr_type = attr.get("type", "text")
    name = attr.get("name", "").lower()

    if attr_type == "text":
        if "name" in name:
            if "product" in name:
                return fake.catch_phrase()
            return fake.name()
        if "id" in name:
            return fake.bothify("????????").upper()
        return " ".join(fake.words(3))
    if attr_type == "email":
        return fake.email()
    if attr_type == "password":
        return fake.password(length=12)
    if attr_type == "tel":
        return fake.phone_number()
    if attr_type == "url":
        return fake.url()
    if attr_type == "image":
        return fake.image_url()
    if attr_type == "color":
        return fake.hex_color()
    if attr_type == "number":
        return _number(fake, attr)
    if attr_type == "date":
        return _date(fake, attr)
    if attr_type == "select":
        options = attr.get("options") or []
        if not options:
            return None
        return fake.random_element(options)["value"]
    if attr_type == "checkbox":
        return fake.pybool()
    if attr_type == "textarea":
        return "\n\n".join(fake.paragraphs(2))
    return fake.word()


def generate_mock_data(configs: List[Dict[str, Any]], count: int = DEFAULT_COUNT, seed: Optional[int] = None) -> Dict[str, List[Dict[str, Any]]]:
    """
    Generate JSON Server records for each entity configuration.

    Args:
        configs: entity configs (`entityName`, `attributes`, ...)
        count: records per entity
        seed: optional seed for reproducible output

    Returns:
        Mapping of `entityName` to `count` records with ids 1..count
    """
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)

    data: Dict[str, List[Dict[str, Any]]] = {}
    for config in configs:
        entity_name = config["entityName"]
        log.info("Generating %d records for %s", count, entity_name)
        records = []
        for i in range(1, count + 1):
            record: Dict[str, Any] = {"id": i}
            for attr in config.get("attributes", []):
                if attr["name"] == "id":
                    continue
                record[attr["name"]] = generate_value(fake, attr)
            records.append(record)
        data[entity_name] = records
    return data
