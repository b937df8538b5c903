"""Presentation-facing character builder for charforge."""

from collections.abc import Callable
from types import MappingProxyType
from typing import Any

import structlog

from charforge.config import Settings, get_settings
from charforge.game.character.attributes import (
    adjust_attribute,
    calculate_modifiers,
    total_attribute_points,
)
from charforge.game.character.catalog import (
    ATTRIBUTE_NAMES,
    CLASS_LIST,
    SKILL_LIST,
    ClassDefinition,
    SkillDefinition,
    get_class_requirements,
)
from charforge.game.character.model import Character
from charforge.game.character.skills import (
    get_skill_points,
    get_skill_total,
    spend_skill_points,
)
from charforge.game.errors import (
    BudgetExceededError,
    CharacterNotFoundError,
    SyncError,
    UnknownAttributeError,
)
from charforge.game.store import CharacterStore
from charforge.sync.client import RemoteSyncClient

logger = structlog.get_logger(__name__)


class CharacterBuilder:
    """
    Entry point for a UI building characters.

    Every public operation runs to completion on the caller's event loop and
    either fully applies or leaves the store untouched. Failures never
    escape: they are logged and reported through ``notify``, and the
    operation returns a falsy value (False or None).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        store: CharacterStore | None = None,
        sync_client: RemoteSyncClient | None = None,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        """
        Initialize the builder.

        Args:
            settings: Settings to use, defaults to the cached application settings
            store: Character store, a fresh one is created if omitted
            sync_client: Remote client, built from settings if omitted
            notify: Callback receiving user-facing failure messages
        """
        self._settings = settings or get_settings()
        self.store = store or CharacterStore(
            default_attribute_score=self._settings.default_attribute_score
        )
        self.sync_client = sync_client or RemoteSyncClient(
            api_url=self._settings.api_url,
            timeout_seconds=self._settings.request_timeout_seconds,
        )
        self.notify = notify
        self._selected_class: str | None = None

    def _notify(self, message: str) -> None:
        if self.notify is not None:
            self.notify(message)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def characters(self) -> tuple[Character, ...]:
        """Current characters, in order."""
        return self.store.characters

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return ATTRIBUTE_NAMES

    @property
    def class_list(self) -> MappingProxyType[str, ClassDefinition]:
        return CLASS_LIST

    @property
    def skill_list(self) -> tuple[SkillDefinition, ...]:
        return SKILL_LIST

    @property
    def attribute_budget(self) -> int:
        return self._settings.attribute_budget

    def class_requirements(self, class_name: str) -> dict[str, int] | None:
        """Minimum attribute scores for a class, or None if unknown."""
        return get_class_requirements(class_name)

    # ------------------------------------------------------------------
    # Class requirement view
    # ------------------------------------------------------------------

    @property
    def selected_class(self) -> str | None:
        """Class whose requirements are currently displayed, if any."""
        return self._selected_class

    def select_class(self, class_name: str) -> dict[str, int] | None:
        """
        Select a class for display.

        Returns:
            The class requirements, or None (and no selection) if unknown
        """
        requirements = get_class_requirements(class_name)
        self._selected_class = class_name if requirements is not None else None
        return requirements

    def clear_selected_class(self) -> None:
        """Close the requirements view."""
        self._selected_class = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_character(self) -> Character:
        """Create a character with default attributes."""
        return self.store.add()

    def remove_character(self, index: int) -> bool:
        """Remove the character at ``index``; out-of-range is a no-op."""
        return self.store.remove(index)

    def adjust_attribute(self, index: int, attribute: str, delta: int) -> bool:
        """
        Change an attribute of the character at ``index``.

        A budget violation is reported through ``notify`` before returning.

        Returns:
            True if the change was applied
        """
        try:
            character = self.store.get(index)
            updated = adjust_attribute(
                character, attribute, delta, budget=self._settings.attribute_budget
            )
        except BudgetExceededError as e:
            logger.info(
                "attribute_change_rejected",
                index=index,
                attribute=attribute,
                delta=delta,
                attempted_total=e.attempted_total,
            )
            self._notify(str(e))
            return False
        except (CharacterNotFoundError, UnknownAttributeError) as e:
            logger.warning(
                "attribute_change_invalid",
                index=index,
                attribute=attribute,
                error=str(e),
            )
            return False

        self.store.replace(index, updated)
        return True

    def spend_skill_point(self, index: int, skill_name: str, delta: int) -> bool:
        """
        Spend (or refund) skill points on the character at ``index``.

        Returns:
            True if the character exists and was updated
        """
        try:
            character = self.store.get(index)
        except CharacterNotFoundError as e:
            logger.warning("skill_spend_invalid", index=index, skill=skill_name, error=str(e))
            return False

        self.store.replace(index, spend_skill_points(character, skill_name, delta))
        return True

    # ------------------------------------------------------------------
    # Remote sync
    # ------------------------------------------------------------------

    async def load_character(self) -> Character | None:
        """
        Load one character from the remote store and append it.

        Returns:
            The new character, or None if the load failed
        """
        try:
            payload = await self.sync_client.fetch_character()
        except SyncError as e:
            logger.error(
                "character_load_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            self._notify(f"Failed to load character: {e}")
            return None

        unknown = sorted(set(payload.attributes) - set(ATTRIBUTE_NAMES))
        missing = sorted(set(ATTRIBUTE_NAMES) - set(payload.attributes))
        if unknown or missing:
            logger.warning(
                "loaded_attributes_differ_from_catalog",
                unknown=unknown,
                missing=missing,
            )

        character = self.store.add_loaded(payload.attributes, payload.skills)
        logger.info("character_loaded", character_id=character.id)
        return character

    async def save_character(self, character: Character) -> bool:
        """
        Submit a character to the remote store.

        Local state is never changed, whatever the outcome.

        Returns:
            True if the remote store accepted the character
        """
        try:
            response = await self.sync_client.save_character(character)
        except SyncError as e:
            logger.error(
                "character_save_failed",
                character_id=character.id,
                error=str(e),
            )
            self._notify(f"Failed to save character: {e}")
            return False

        logger.info("character_saved", character_id=character.id, response=response)
        return True

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def character_sheet(self, index: int) -> dict[str, Any] | None:
        """
        Build a render-ready view of the character at ``index``.

        Skills whose governing attribute is missing from a loaded character
        get a total of None.

        Returns:
            The sheet, or None if ``index`` is out of range
        """
        try:
            character = self.store.get(index)
        except CharacterNotFoundError as e:
            logger.warning("character_sheet_invalid", index=index, error=str(e))
            return None
        modifiers = calculate_modifiers(character.attributes)

        skills = []
        for skill in SKILL_LIST:
            has_attribute = skill.attribute_modifier in character.attributes
            skills.append(
                {
                    "name": skill.name,
                    "points": get_skill_points(character, skill.name),
                    "attribute": skill.attribute_modifier,
                    "total": get_skill_total(character, skill) if has_attribute else None,
                }
            )

        return {
            "id": character.id,
            "attributes": [
                {"name": name, "score": score, "modifier": modifiers[name]}
                for name, score in character.attributes.items()
            ],
            "attribute_total": total_attribute_points(character.attributes),
            "attribute_budget": self._settings.attribute_budget,
            "skills": skills,
        }
