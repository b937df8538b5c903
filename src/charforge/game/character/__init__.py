"""Character data model, catalogs and build rules."""

from .attributes import (
    ATTRIBUTE_BUDGET,
    DEFAULT_ATTRIBUTE_SCORE,
    adjust_attribute,
    calculate_modifiers,
    create_default_attributes,
    get_modifier,
    total_attribute_points,
)
from .catalog import (
    ATTRIBUTE_NAMES,
    CLASS_LIST,
    SKILL_LIST,
    ClassDefinition,
    SkillDefinition,
    get_class_requirements,
    get_skill_definition,
)
from .model import Character
from .skills import calculate_skill_totals, get_skill_points, get_skill_total, spend_skill_points

__all__ = [
    # Catalogs
    "ATTRIBUTE_NAMES",
    "CLASS_LIST",
    "SKILL_LIST",
    "ClassDefinition",
    "SkillDefinition",
    "get_class_requirements",
    "get_skill_definition",
    # Model
    "Character",
    # Attributes
    "ATTRIBUTE_BUDGET",
    "DEFAULT_ATTRIBUTE_SCORE",
    "adjust_attribute",
    "calculate_modifiers",
    "create_default_attributes",
    "get_modifier",
    "total_attribute_points",
    # Skills
    "calculate_skill_totals",
    "get_skill_points",
    "get_skill_total",
    "spend_skill_points",
]
