"""
Best-effort scanner for JHipster Domain Language text.

This is a regex scan, not a grammar: `entity` and `relationship` blocks it
recognises are extracted, everything else is ignored without error.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List

from protogen.generators.types import Entity, EntityField, EntityRelationship

RELATIONSHIP_KINDS = ("OneToOne", "OneToMany", "ManyToOne", "ManyToMany")
_KINDS = "|".join(RELATIONSHIP_KINDS)

ENTITY_RE = re.compile(r"entity\s+(\w+)\s*{([^}]*)}")
FIELD_RE = re.compile(r"\s*(\w+)\s+(\w+)(?:[ \t]+([^,\n]*))?")
RELATIONSHIP_RE = re.compile(rf"relationship\s+({_KINDS})\s*{{((?:[^{{}}]|{{[^{{}}]*}})*)}}")
RELATIONSHIP_PAIR_RE = re.compile(r"(\w+)(?:{(\w+)(?:\([^)]*\))?})?\s+to\s+(\w+)(?:{(\w+)(?:\([^)]*\))?})?")

# Forms accepted as "has entities" / "has relationships" by validate_jdl
ENTITY_FORMS = (
    re.compile(r"entity\s+\w+\s*{"),
    re.compile(r"entities:\s*\n\s*\w+:"),
    re.compile(r"\w+:\s*{\s*fields:"),
)
RELATIONSHIP_FORMS = (
    re.compile(rf"relationship\s+({_KINDS})\s*{{"),
    re.compile(r"relationships:\s*\n\s*-"),
    re.compile(rf"\w+:\s*{{\s*type:\s*({_KINDS})"),
)


@dataclass
class JdlValidation:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {"isValid": self.is_valid, "errors": list(self.errors)}


def _parse_fields(block: str) -> List[EntityField]:
    fields = []
    for match in FIELD_RE.finditer(block):
        name, field_type, validations = match.group(1), match.group(2), (match.group(3) or "").strip()
        fields.append(EntityField(
            name=name,
            type=field_type,
            validations=validations,
            is_required="required" in validations,
        ))
    return fields


def parse_jdl(jdl_content: str) -> List[Entity]:
    """Extract entities, their fields and the relationships linking them."""
    if not jdl_content:
        return []

    entities = [
        Entity(name=m.group(1), fields=_parse_fields(m.group(2)))
        for m in ENTITY_RE.finditer(jdl_content)
    ]
    by_name = {}
    for entity in entities:
        by_name.setdefault(entity.name, entity)

    for m in RELATIONSHIP_RE.finditer(jdl_content):
        kind, body = m.group(1), m.group(2)
        # Only the first pair of a block is linked
        pair = RELATIONSHIP_PAIR_RE.search(body)
        if not pair:
            continue
        source_name, source_field, target_name, target_field = pair.groups()
        source = by_name.get(source_name)
        target = by_name.get(target_name)
        if not source or not target:
            continue

        source.relationships.append(EntityRelationship(
            type=kind, with_entity=target.name, field=source_field, is_source=True,
        ))
        target.relationships.append(EntityRelationship(
            type=kind, with_entity=source.name, field=target_field, is_source=False,
        ))

    return entities


def validate_jdl(jdl_content: str) -> JdlValidation:
    """Shallow syntax check; a full JDL parser would be needed for more."""
    jdl_content = jdl_content or ""
    errors = []

    has_entity = any(p.search(jdl_content) for p in ENTITY_FORMS)
    has_relationship = any(p.search(jdl_content) for p in RELATIONSHIP_FORMS)

    if not has_entity:
        errors.append("No entity definitions found in JDL")
    if "relationship" in jdl_content and not has_relationship:
        errors.append("Invalid relationship syntax in JDL")

    return JdlValidation(is_valid=not errors, errors=errors)
