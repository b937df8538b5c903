"""Skill point ledger.

Each skill's total is the points spent on it plus the modifier of its
governing attribute. Points are clamped at zero and have no upper bound.
"""

from charforge.game.character.attributes import get_modifier
from charforge.game.character.catalog import SKILL_LIST, SkillDefinition
from charforge.game.character.model import Character

# Lowest number of points a skill can hold
MIN_SKILL_POINTS = 0


def get_skill_points(character: Character, skill_name: str) -> int:
    """Points spent on a skill, 0 when the character never touched it."""
    return character.skills.get(skill_name, 0)


def spend_skill_points(character: Character, skill_name: str, delta: int) -> Character:
    """Add ``delta`` points to a skill, never going below zero.

    Only the targeted skill entry changes. Spending never fails.

    Args:
        character: Character spending the points
        skill_name: Name of the skill
        delta: Signed number of points to add

    Returns:
        A new Character with the updated skills mapping
    """
    new_points = max(get_skill_points(character, skill_name) + delta, MIN_SKILL_POINTS)
    skills = dict(character.skills)
    skills[skill_name] = new_points
    return character.with_skills(skills)


def get_skill_total(character: Character, skill: SkillDefinition) -> int:
    """Calculate a skill's total value.

    Args:
        character: Character whose skill is evaluated
        skill: Skill definition naming the governing attribute

    Returns:
        Points spent plus the governing attribute's modifier

    Raises:
        KeyError: If the character has no score for the governing attribute
    """
    score = character.attributes[skill.attribute_modifier]
    return get_skill_points(character, skill.name) + get_modifier(score)


def calculate_skill_totals(
    character: Character, skills: tuple[SkillDefinition, ...] = SKILL_LIST
) -> dict[str, int]:
    """Total value for every catalog skill, keyed by skill name."""
    return {skill.name: get_skill_total(character, skill) for skill in skills}
