"""Tests for the presentation-facing character builder."""

import pytest
from structlog.testing import capture_logs

from charforge.game.character.catalog import ATTRIBUTE_NAMES, CLASS_LIST, SKILL_LIST
from charforge.game.engine import CharacterBuilder


class TestReadAccessors:
    """Test catalog accessors."""

    def test_catalogs(self, builder):
        """The builder exposes the static catalogs."""
        assert builder.attribute_names == ATTRIBUTE_NAMES
        assert builder.class_list is CLASS_LIST
        assert builder.skill_list == SKILL_LIST
        assert builder.attribute_budget == 70

    def test_class_requirements(self, builder):
        """Class requirements come from the catalog."""
        assert builder.class_requirements("Barbarian")["Strength"] == 14
        assert builder.class_requirements("Paladin") is None


class TestClassSelection:
    """Test the class requirement view state."""

    def test_select_and_clear(self, builder):
        """Selecting shows requirements, clearing hides them."""
        reqs = builder.select_class("Bard")
        assert reqs["Charisma"] == 14
        assert builder.selected_class == "Bard"

        builder.clear_selected_class()
        assert builder.selected_class is None

    def test_select_unknown(self, builder):
        """Unknown classes leave nothing selected."""
        builder.select_class("Bard")
        assert builder.select_class("Paladin") is None
        assert builder.selected_class is None

    def test_selection_does_not_touch_characters(self, builder):
        """Class selection is display-only."""
        builder.add_character()
        before = builder.characters
        builder.select_class("Wizard")
        assert builder.characters == before


class TestAdjustAttribute:
    """Test attribute changes through the builder."""

    def test_adjust_applies(self, builder, notifications):
        """A valid change replaces the stored character."""
        builder.add_character()
        assert builder.adjust_attribute(0, "Strength", 1) is True
        assert builder.characters[0].attributes["Strength"] == 11
        assert notifications == []

    def test_budget_exceeded_notifies_and_keeps_state(self, builder, notifications):
        """A budget violation notifies once and changes nothing."""
        builder.add_character()
        assert builder.adjust_attribute(0, "Wisdom", 10) is True
        before = builder.characters

        assert builder.adjust_attribute(0, "Strength", 1) is False

        assert notifications == [
            "Total attributes cannot exceed 70. Please decrease another attribute first."
        ]
        assert builder.characters == before

    def test_budget_from_settings(self, settings, notifications):
        """The configured budget is enforced."""
        tight = CharacterBuilder(
            settings=settings.model_copy(update={"attribute_budget": 60}),
            notify=notifications.append,
        )
        tight.add_character()
        assert tight.adjust_attribute(0, "Strength", 1) is False
        assert "cannot exceed 60" in notifications[0]

    def test_unknown_attribute(self, builder, notifications):
        """Unknown attributes are rejected without notification."""
        builder.add_character()
        assert builder.adjust_attribute(0, "Luck", 1) is False
        assert notifications == []

    def test_missing_character(self, builder):
        """Adjusting a missing character is a no-op."""
        assert builder.adjust_attribute(3, "Strength", 1) is False
        assert builder.characters == ()

    def test_other_characters_untouched(self, builder):
        """Only the targeted character is replaced."""
        builder.add_character()
        builder.add_character()
        first = builder.characters[0]
        builder.adjust_attribute(1, "Dexterity", -2)
        assert builder.characters[0] is first
        assert builder.characters[1].attributes["Dexterity"] == 8


class TestSpendSkillPoint:
    """Test skill spending through the builder."""

    def test_spend(self, builder):
        """Spending updates the stored character."""
        builder.add_character()
        assert builder.spend_skill_point(0, "Stealth", 1) is True
        assert builder.spend_skill_point(0, "Stealth", 1) is True
        assert builder.characters[0].skills == {"Stealth": 2}

    def test_refund_floor(self, builder):
        """Refunding below zero stores zero."""
        builder.add_character()
        builder.spend_skill_point(0, "Stealth", -1)
        assert builder.characters[0].skills == {"Stealth": 0}

    def test_missing_character(self, builder):
        """Spending on a missing character is a no-op."""
        assert builder.spend_skill_point(0, "Stealth", 1) is False


class TestAddRemove:
    """Test adding and removing characters through the builder."""

    def test_add_then_remove(self, builder):
        """Add followed by remove(0) empties the collection."""
        builder.add_character()
        assert builder.remove_character(0) is True
        assert builder.characters == ()

    def test_remove_out_of_range(self, builder):
        """Out-of-range removal changes nothing."""
        builder.add_character()
        assert builder.remove_character(1) is False
        assert len(builder.characters) == 1


class TestCharacterSheet:
    """Test the render-ready character view."""

    def test_sheet(self, builder):
        """The sheet lists modifiers, skill totals and the budget."""
        builder.add_character()
        builder.adjust_attribute(0, "Dexterity", 4)
        builder.spend_skill_point(0, "Stealth", 3)

        sheet = builder.character_sheet(0)

        assert sheet["id"] == 0
        assert sheet["attribute_total"] == 64
        assert sheet["attribute_budget"] == 70
        dex = next(a for a in sheet["attributes"] if a["name"] == "Dexterity")
        assert dex == {"name": "Dexterity", "score": 14, "modifier": 2}
        stealth = next(s for s in sheet["skills"] if s["name"] == "Stealth")
        assert stealth == {"name": "Stealth", "points": 3, "attribute": "Dexterity", "total": 5}

    def test_sheet_out_of_range(self, builder):
        """Asking for a missing character returns None."""
        builder.add_character()
        assert builder.character_sheet(1) is None
        assert builder.character_sheet(-1) is None

    async def test_sheet_for_partial_loaded_character(self, builder, endpoint):
        """Skills with a missing governing attribute have no total."""
        endpoint.load_body = {"body": {"attributes": {"STR": 15, "DEX": 12}}}
        await builder.load_character()

        sheet = builder.character_sheet(0)

        assert [a["name"] for a in sheet["attributes"]] == ["STR", "DEX"]
        assert all(s["total"] is None for s in sheet["skills"])


@pytest.mark.asyncio
class TestLoadCharacter:
    """Test loading through the builder."""

    async def test_load_appends_character(self, builder, endpoint):
        """A successful load appends a character with the next id."""
        endpoint.load_body = {
            "body": {"attributes": {"STR": 15, "DEX": 12}, "skills": {"Stealth": 2}}
        }
        builder.add_character()
        builder.add_character()

        character = await builder.load_character()

        assert character is not None
        assert character.id == 2
        assert character.attributes == {"STR": 15, "DEX": 12}
        assert character.skills["Stealth"] == 2
        assert builder.characters[-1] == character

    async def test_load_null_attributes(self, builder, endpoint, notifications):
        """Null attributes add nothing and report InvalidPayloadError."""
        endpoint.load_body = {"body": {"attributes": None}}

        with capture_logs() as logs:
            character = await builder.load_character()

        assert character is None
        assert builder.characters == ()
        assert any(
            log["event"] == "character_load_failed"
            and log["error_type"] == "InvalidPayloadError"
            for log in logs
        )
        assert len(notifications) == 1

    async def test_load_redirect_status_adds_nothing(self, builder, endpoint):
        """A 3xx response fails the load and leaves the store alone."""
        endpoint.load_status = 300

        with capture_logs() as logs:
            assert await builder.load_character() is None

        assert builder.characters == ()
        assert any(log.get("error_type") == "RequestFailedError" for log in logs)

    async def test_load_request_failed(self, builder, endpoint):
        """Non-success responses add nothing and report RequestFailedError."""
        endpoint.load_status = 404
        builder.add_character()
        before = builder.characters

        with capture_logs() as logs:
            assert await builder.load_character() is None

        assert builder.characters == before
        assert any(log.get("error_type") == "RequestFailedError" for log in logs)

    async def test_retry_after_failure(self, builder, endpoint):
        """A failed load can simply be retried."""
        endpoint.load_status = 500
        assert await builder.load_character() is None

        endpoint.load_status = 200
        character = await builder.load_character()

        assert character is not None
        assert endpoint.load_requests == 2
        assert len(builder.characters) == 1

    async def test_load_warns_on_catalog_mismatch(self, builder, endpoint):
        """Attributes that differ from the catalog are logged but kept."""
        endpoint.load_body = {"body": {"attributes": {"STR": 15}}}

        with capture_logs() as logs:
            character = await builder.load_character()

        assert character.attributes == {"STR": 15}
        mismatch = next(
            log for log in logs if log["event"] == "loaded_attributes_differ_from_catalog"
        )
        assert mismatch["unknown"] == ["STR"]
        assert "Strength" in mismatch["missing"]

    async def test_loaded_ids_stay_unique_after_remove(self, builder):
        """Ids keep increasing across removals and loads."""
        builder.add_character()
        builder.add_character()
        builder.remove_character(0)

        character = await builder.load_character()

        assert [c.id for c in builder.characters] == [1, 2]
        assert character.id == 2


@pytest.mark.asyncio
class TestSaveCharacter:
    """Test saving through the builder."""

    async def test_save(self, builder, endpoint):
        """Saving posts the character and leaves local state alone."""
        character = builder.add_character()
        builder.spend_skill_point(0, "Arcana", 2)
        stored = builder.characters[0]

        assert await builder.save_character(stored) is True

        assert endpoint.saved == [stored.to_payload()]
        assert builder.characters == (stored,)
        assert character.skills == {}

    async def test_save_failure(self, builder, endpoint, notifications):
        """A failed save is reported and changes nothing."""
        endpoint.save_status = 500
        character = builder.add_character()

        with capture_logs() as logs:
            assert await builder.save_character(character) is False

        assert builder.characters == (character,)
        assert any(log["event"] == "character_save_failed" for log in logs)
        assert notifications and "Failed to save character" in notifications[0]
