"""Character record used by the build engine."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Character:
    """
    A single character under construction.

    Instances are treated as values: every change produces a new Character
    through ``with_attributes``/``with_skills`` and the store swaps it in.
    Both mappings are read-only copies of whatever was passed in.

    Attributes:
        id: Session-unique identifier, never reused after removal
        attributes: Attribute name -> score
        skills: Skill name -> points spent (absent means 0)
    """

    id: int
    attributes: Mapping[str, int] = field(default_factory=dict)
    skills: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "skills", MappingProxyType(dict(self.skills)))

    def with_attributes(self, attributes: Mapping[str, int]) -> "Character":
        """Return a copy of this character with a new attribute mapping."""
        return replace(self, attributes=attributes)

    def with_skills(self, skills: Mapping[str, int]) -> "Character":
        """Return a copy of this character with a new skills mapping."""
        return replace(self, skills=skills)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON shape the remote store expects."""
        return {
            "id": self.id,
            "attributes": dict(self.attributes),
            "skills": dict(self.skills),
        }
