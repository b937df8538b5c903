"""
Static catalogs for character building.

Attribute names, class requirement tables and skill definitions are read
once from ``data/catalog.yaml`` when this module is imported and are never
mutated afterwards.
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from charforge.game.errors import CatalogLoadError

CATALOG_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "catalog.yaml"


@dataclass(frozen=True)
class SkillDefinition:
    """A skill and the attribute whose modifier it adds."""

    name: str
    attribute_modifier: str


@dataclass(frozen=True)
class ClassDefinition:
    """A class and the minimum attribute scores it asks for (display only)."""

    name: str
    requirements: MappingProxyType[str, int]


@dataclass(frozen=True)
class Catalog:
    """Container for the three static catalogs."""

    attributes: tuple[str, ...]
    classes: MappingProxyType[str, ClassDefinition]
    skills: tuple[SkillDefinition, ...]


def _require_mapping(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict) or not value:
        raise CatalogLoadError(f"'{key}' must be a non-empty mapping in {path}")
    return value


def load_catalog(path: Path | None = None) -> Catalog:
    """
    Load and validate the static catalog.

    Args:
        path: YAML file to read, defaults to the packaged catalog

    Returns:
        Parsed Catalog

    Raises:
        CatalogLoadError: If the file is missing, unparsable, or references
            an attribute outside the declared attribute list
    """
    path = path or CATALOG_PATH
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"File not found: {path}") from e
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"YAML parsing error in {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogLoadError(f"Empty or invalid catalog file: {path}")

    attributes = data.get("attributes")
    if not isinstance(attributes, list) or not attributes:
        raise CatalogLoadError(f"'attributes' must be a non-empty list in {path}")
    if not all(isinstance(name, str) for name in attributes):
        raise CatalogLoadError(f"Attribute names must be strings in {path}")
    if len(set(attributes)) != len(attributes):
        raise CatalogLoadError(f"Duplicate attribute names in {path}")
    known = set(attributes)

    classes: dict[str, ClassDefinition] = {}
    for class_name, requirements in _require_mapping(data, "classes", path).items():
        if not isinstance(requirements, dict):
            raise CatalogLoadError(f"Class '{class_name}' requirements must be a mapping")
        unknown = set(requirements) - known
        if unknown:
            raise CatalogLoadError(
                f"Class '{class_name}' references unknown attributes: {sorted(unknown)}"
            )
        try:
            scores = {k: int(v) for k, v in requirements.items()}
        except (TypeError, ValueError) as e:
            raise CatalogLoadError(
                f"Class '{class_name}' has a non-numeric requirement: {e}"
            ) from e
        classes[class_name] = ClassDefinition(
            name=class_name, requirements=MappingProxyType(scores)
        )

    skills: list[SkillDefinition] = []
    for skill_name, attribute in _require_mapping(data, "skills", path).items():
        if not isinstance(attribute, str) or attribute not in known:
            raise CatalogLoadError(
                f"Skill '{skill_name}' is governed by unknown attribute '{attribute}'"
            )
        skills.append(SkillDefinition(name=skill_name, attribute_modifier=attribute))

    return Catalog(
        attributes=tuple(attributes),
        classes=MappingProxyType(classes),
        skills=tuple(skills),
    )


CATALOG = load_catalog()

ATTRIBUTE_NAMES = CATALOG.attributes
CLASS_LIST = CATALOG.classes
SKILL_LIST = CATALOG.skills

_SKILLS_BY_NAME = {skill.name: skill for skill in SKILL_LIST}


def get_class_requirements(class_name: str) -> dict[str, int] | None:
    """Get the minimum attribute scores for a class, or None if unknown."""
    class_def = CLASS_LIST.get(class_name)
    if class_def is None:
        return None
    return dict(class_def.requirements)


def get_skill_definition(skill_name: str) -> SkillDefinition | None:
    """Look up a skill definition by name."""
    return _SKILLS_BY_NAME.get(skill_name)
