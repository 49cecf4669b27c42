"""Dataclasses shared by the generators."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EntityField:
    """A `name type validations` triple scanned from a JDL entity block."""
    name: str
    type: str
    validations: str = ""
    is_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "validations": self.validations,
            "isRequired": self.is_required,
        }


@dataclass
class EntityRelationship:
    type: str  # OneToOne, OneToMany, ManyToOne or ManyToMany
    with_entity: str
    field: Optional[str]
    is_source: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "with": self.with_entity,
            "field": self.field,
            "isSource": self.is_source,
        }


@dataclass
class Entity:
    name: str
    fields: List[EntityField] = field(default_factory=list)
    relationships: List[EntityRelationship] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.relationships:
            data["relationships"] = [r.to_dict() for r in self.relationships]
        return data


@dataclass
class GeneratedFile:
    """Represents a generated file."""
    path: str  # Relative path from output directory
    content: str  # File contents
    executable: bool = False
