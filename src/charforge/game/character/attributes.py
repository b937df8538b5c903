"""Character attributes, ability modifiers and the attribute budget.

Modifiers follow the D&D-style ``(score - 10) // 2`` rule. Attribute changes
never mutate a character in place; ``adjust_attribute`` returns a new
Character or raises, leaving the original untouched.
"""

from collections.abc import Mapping

import structlog

from charforge.game.character.catalog import ATTRIBUTE_NAMES
from charforge.game.character.model import Character
from charforge.game.errors import BudgetExceededError, UnknownAttributeError

logger = structlog.get_logger(__name__)

# Maximum sum of all attribute scores
ATTRIBUTE_BUDGET = 70

# Score every attribute starts at on a new character
DEFAULT_ATTRIBUTE_SCORE = 10


def get_modifier(value: int) -> int:
    """Calculate D&D-style attribute modifier.

    Args:
        value: The attribute value

    Returns:
        The modifier: (value - 10) // 2

    Examples:
        >>> get_modifier(10)
        0
        >>> get_modifier(12)
        1
        >>> get_modifier(9)
        -1
    """
    return (value - 10) // 2


def create_default_attributes(score: int = DEFAULT_ATTRIBUTE_SCORE) -> dict[str, int]:
    """Build an attribute mapping with every catalog attribute set to ``score``."""
    return {name: score for name in ATTRIBUTE_NAMES}


def total_attribute_points(attributes: Mapping[str, int]) -> int:
    """Sum of all attribute scores."""
    return sum(attributes.values())


def calculate_modifiers(attributes: Mapping[str, int]) -> dict[str, int]:
    """Calculate the modifier for every attribute in the mapping.

    Args:
        attributes: Attribute name -> score

    Returns:
        Attribute name -> modifier, in the same order
    """
    return {name: get_modifier(score) for name, score in attributes.items()}


def adjust_attribute(
    character: Character,
    attribute: str,
    delta: int,
    budget: int = ATTRIBUTE_BUDGET,
) -> Character:
    """Change one attribute score by ``delta``, enforcing the attribute budget.

    The change is rejected when the new total would be above ``budget`` and
    higher than the current total. A character that is already over budget
    (e.g. loaded from the remote store) can still be lowered.

    Args:
        character: Character to adjust
        attribute: Attribute name, must already be present on the character
        delta: Signed step to apply to the score
        budget: Maximum allowed attribute total

    Returns:
        A new Character carrying the updated attributes

    Raises:
        UnknownAttributeError: If the character has no such attribute
        BudgetExceededError: If the change would exceed the budget
    """
    if attribute not in character.attributes:
        raise UnknownAttributeError(attribute)

    candidate = dict(character.attributes)
    candidate[attribute] = candidate[attribute] + delta

    current_total = total_attribute_points(character.attributes)
    candidate_total = total_attribute_points(candidate)
    if candidate_total > budget and candidate_total > current_total:
        logger.debug(
            "attribute_budget_exceeded",
            character_id=character.id,
            attribute=attribute,
            attempted_total=candidate_total,
            budget=budget,
        )
        raise BudgetExceededError(candidate_total, budget)

    return character.with_attributes(candidate)
