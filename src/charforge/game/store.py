"""Ordered, in-memory collection of characters."""

from collections.abc import Iterator, Mapping

import structlog

from charforge.game.character.attributes import (
    DEFAULT_ATTRIBUTE_SCORE,
    create_default_attributes,
)
from charforge.game.character.model import Character
from charforge.game.errors import CharacterNotFoundError

logger = structlog.get_logger(__name__)


class CharacterStore:
    """
    Owns the authoritative list of characters for the current session.

    Identifiers come from a counter that only ever increases, so ids stay
    unique after removals. Rule functions never touch the list directly:
    they return a new Character which is written back with ``replace``.
    """

    def __init__(self, default_attribute_score: int = DEFAULT_ATTRIBUTE_SCORE) -> None:
        """
        Initialize an empty store.

        Args:
            default_attribute_score: Score for every attribute of added characters
        """
        self._characters: list[Character] = []
        self._next_id = 0
        self._default_attribute_score = default_attribute_score

    @property
    def characters(self) -> tuple[Character, ...]:
        """Current characters, in order."""
        return tuple(self._characters)

    @property
    def next_id(self) -> int:
        """Identifier the next created character will receive."""
        return self._next_id

    def _allocate_id(self) -> int:
        character_id = self._next_id
        self._next_id += 1
        return character_id

    def _append(self, character: Character) -> Character:
        self._characters.append(character)
        logger.info(
            "character_added",
            character_id=character.id,
            total_characters=len(self._characters),
        )
        return character

    def add(self) -> Character:
        """
        Append a new character with default attributes and no skills.

        Returns:
            The created character
        """
        return self._append(
            Character(
                id=self._allocate_id(),
                attributes=create_default_attributes(self._default_attribute_score),
                skills={},
            )
        )

    def add_loaded(self, attributes: Mapping[str, int], skills: Mapping[str, int]) -> Character:
        """
        Append a character built from a remote payload.

        Attributes are kept verbatim, without reconciling them against the
        attribute catalog.

        Args:
            attributes: Attribute name -> score from the payload
            skills: Skill name -> points from the payload

        Returns:
            The created character
        """
        return self._append(
            Character(id=self._allocate_id(), attributes=attributes, skills=skills)
        )

    def get(self, index: int) -> Character:
        """
        Get the character at a position.

        Args:
            index: Position in the collection

        Raises:
            CharacterNotFoundError: If ``index`` is out of range
        """
        if not 0 <= index < len(self._characters):
            raise CharacterNotFoundError(f"No character at index {index}")
        return self._characters[index]

    def replace(self, index: int, character: Character) -> None:
        """
        Swap in an updated version of the character at ``index``.

        Raises:
            CharacterNotFoundError: If ``index`` is out of range
        """
        self.get(index)
        self._characters[index] = character

    def remove(self, index: int) -> bool:
        """
        Remove the character at a position.

        Other characters keep their ids.

        Args:
            index: Position in the collection

        Returns:
            True if a character was removed, False if ``index`` was out of range
        """
        if not 0 <= index < len(self._characters):
            logger.warning(
                "character_remove_out_of_range",
                index=index,
                total_characters=len(self._characters),
            )
            return False

        character = self._characters.pop(index)
        logger.info(
            "character_removed",
            character_id=character.id,
            total_characters=len(self._characters),
        )
        return True

    def __iter__(self) -> Iterator[Character]:
        return iter(tuple(self._characters))

    def __len__(self) -> int:
        """Return the number of characters."""
        return len(self._characters)
