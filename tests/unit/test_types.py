"""Tests for the wire enums."""

import pytest

from gcms_migrate.core import MigrationStatus, RelationType, Renderer


class TestRelationType:
    """Test relation type parsing and list-ness."""

    @pytest.mark.parametrize("spelling", ["ManyToOne", "MANY_TO_ONE", "many_to_one"])
    def test_accepts_common_spellings(self, spelling):
        """Test that enum, constant and snake spellings resolve to one member."""
        assert RelationType(spelling) is RelationType.MANY_TO_ONE

    def test_rejects_unknown_relation(self):
        """Test that an unknown relation type is rejected."""
        with pytest.raises(ValueError):
            RelationType("SomeToSome")

    @pytest.mark.parametrize(
        "relation_type,forward,reverse",
        [
            (RelationType.ONE_TO_ONE, False, False),
            (RelationType.ONE_TO_MANY, True, False),
            (RelationType.MANY_TO_ONE, False, True),
            (RelationType.MANY_TO_MANY, True, True),
        ],
    )
    def test_list_ness(self, relation_type, forward, reverse):
        """Test which side of each relation holds a list."""
        assert relation_type.forward_is_list is forward
        assert relation_type.reverse_is_list is reverse


class TestMigrationStatus:
    """Test migration status helpers."""

    def test_finished_states(self):
        """Test that only SUCCESS and FAILED are final."""
        assert MigrationStatus.SUCCESS.is_finished
        assert MigrationStatus.FAILED.is_finished
        assert not MigrationStatus.QUEUED.is_finished
        assert not MigrationStatus.RUNNING.is_finished


def test_single_line_renderer_wire_value():
    """Test the default renderer for string fields."""
    assert Renderer.SINGLE_LINE.value == "GCMS_SINGLE_LINE"
