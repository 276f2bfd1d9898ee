"""
Unit Tests for the declarative section schema
"""
import pytest

from personalbook_cli.sections import (
    LIST_SECTION_NAMES,
    SECTION_SCHEMAS,
    get_schema,
    make_item,
    next_item_id,
    parse_assignments,
    remove_item,
    update_about,
    update_item,
)


class TestSchema:

    def test_every_profile_section_present(self):
        assert set(SECTION_SCHEMAS) == {
            "about", "education", "projects", "learnings",
            "interests", "wishlist", "tours", "bestPics",
        }
        assert "about" not in LIST_SECTION_NAMES

    def test_aliases(self):
        assert get_schema("best_pics").name == "bestPics"
        assert get_schema("best-pics").name == "bestPics"

    def test_unknown_section(self):
        with pytest.raises(ValueError):
            get_schema("hobbies")


class TestMakeItem:

    def test_first_item_gets_id_one(self):
        item = make_item("interests", [], {"text": "Chess"})

        assert item == {"id": 1, "text": "Chess"}

    def test_id_is_max_plus_one(self):
        items = [{"id": 1, "text": "a"}, {"id": 7, "text": "b"}, {"id": 3, "text": "c"}]

        assert make_item("interests", items, {"text": "d"})["id"] == 8

    def test_gap_ids_are_not_reused(self):
        items = [{"id": 2, "text": "b"}]

        assert next_item_id(items) == 3

    def test_only_schema_fields(self):
        item = make_item("tours", [], {"place": "Turin"})

        assert set(item) == {"id", "place", "date", "desc", "image"}
        assert item["date"] == ""

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            make_item("interests", [], {"colour": "red"})

    def test_about_is_not_a_list(self):
        with pytest.raises(ValueError):
            make_item("about", [], {"bio": "x"})

    def test_does_not_modify_items(self):
        items = [{"id": 1, "text": "a"}]

        make_item("interests", items, {"text": "b"})

        assert items == [{"id": 1, "text": "a"}]


class TestUpdateAndRemove:

    def test_update_in_place(self):
        items = [{"id": 1, "name": "Old", "stack": "", "desc": "", "image": ""}]

        update_item("projects", items, 1, {"name": "New"})

        assert items[0]["name"] == "New"

    def test_update_missing_item(self):
        with pytest.raises(ValueError):
            update_item("projects", [], 4, {"name": "x"})

    def test_remove(self):
        items = [{"id": 1, "text": "a"}, {"id": 2, "text": "b"}]

        assert remove_item("interests", items, 1) == [{"id": 2, "text": "b"}]

    def test_remove_missing_item(self):
        with pytest.raises(ValueError):
            remove_item("interests", [{"id": 1}], 2)

    def test_update_about(self):
        about = {"name": "Ada", "bio": "old", "image": "x"}

        assert update_about(about, {"bio": "new"}) == {"name": "Ada", "bio": "new", "image": "x"}

    def test_update_about_unknown_field(self):
        with pytest.raises(ValueError):
            update_about({}, {"age": "36"})


class TestParseAssignments:

    def test_parses_pairs(self):
        assert parse_assignments(["name=Ada", "bio=a=b"]) == {"name": "Ada", "bio": "a=b"}

    def test_empty_value_allowed(self):
        assert parse_assignments(["image="]) == {"image": ""}

    def test_missing_equals(self):
        with pytest.raises(ValueError):
            parse_assignments(["name"])
