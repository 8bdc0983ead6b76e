"""Unit tests for timelinize_cli.options: search and import option assembly."""

from __future__ import annotations

import json

from timelinize_cli.options import (
    ItemUniqueConstraints,
    ProcessingOptions,
    build_entity_search_options,
    build_processing_options,
    build_search_options,
    collect_files,
    parse_constraints_json,
)


class TestSearchOptions:
    def test_exact_text(self) -> None:
        assert build_search_options(text="foo") == {"data_source": ["firefox"], "data_text": ["foo"]}

    def test_semantic(self) -> None:
        assert build_search_options(semantic="bar") == {"data_source": ["firefox"], "semantic_text": "bar"}

    def test_text_wins_over_semantic(self) -> None:
        assert "semantic_text" not in build_search_options(text="foo", semantic="bar")

    def test_nothing_to_search(self) -> None:
        assert build_search_options() is None
        assert build_search_options(text="", semantic="") is None


class TestEntitySearchOptions:
    def test_name_only(self) -> None:
        opts = build_entity_search_options("r1", name="Ada")
        assert opts == {"repo": "r1", "attributes": [{"name": "name", "value": "Ada"}], "or_fields": True}

    def test_phone_and_email_are_list_wrapped(self) -> None:
        opts = build_entity_search_options("r1", name="Ada", phone="555-0100", email="ada@example.com")
        assert opts["attributes"] == [
            {"name": "name", "value": "Ada"},
            [{"name": "phone_number", "value": "555-0100"}],
            [{"name": "email_address", "value": "ada@example.com"}],
        ]

    def test_no_attributes(self) -> None:
        assert build_entity_search_options("r1")["attributes"] == []


class TestCollectFiles:
    def test_single_then_list_order(self) -> None:
        assert collect_files("a.txt", "b.txt,c.txt") == ["a.txt", "b.txt", "c.txt"]

    def test_whitespace_trimmed(self) -> None:
        assert collect_files(" a.txt ", " b.txt , c.txt ") == ["a.txt", "b.txt", "c.txt"]

    def test_empty_entries_dropped(self) -> None:
        assert collect_files(None, "b.txt,,  ,c.txt,") == ["b.txt", "c.txt"]

    def test_nothing(self) -> None:
        assert collect_files(None, None) == []
        assert collect_files("", "") == []


class TestProcessingOptions:
    def test_defaults_have_every_field(self) -> None:
        d = build_processing_options().to_dict()
        assert set(d) == {
            "integrity", "overwrite_local_changes", "item_unique_constraints",
            "interactive", "estimate_total",
        }
        assert d["integrity"] is False
        assert d["overwrite_local_changes"] is False
        assert d["interactive"] is None
        assert d["estimate_total"] is True
        assert d["item_unique_constraints"] == ItemUniqueConstraints().to_dict()

    def test_default_unique_constraints(self) -> None:
        assert ItemUniqueConstraints().to_dict() == {
            "data_source_name": True,
            "original_location": True,
            "filename": True,
            "timestamp": True,
            "coordinates": False,
            "classification_name": False,
            "data": True,
        }

    def test_defaults_are_json_serializable(self) -> None:
        d = build_processing_options().to_dict()
        assert json.loads(json.dumps(d)) == d

    def test_flag_values_flow_through(self) -> None:
        c = ItemUniqueConstraints(coordinates=True, data=False)
        d = build_processing_options(
            integrity=True, overwrite_local_changes=True, interactive=True,
            estimate_total=False, constraints=c,
        ).to_dict()
        assert d["integrity"] is True
        assert d["overwrite_local_changes"] is True
        assert d["interactive"] is True
        assert d["estimate_total"] is False
        assert d["item_unique_constraints"]["coordinates"] is True
        assert d["item_unique_constraints"]["data"] is False

    def test_constraints_json_replaces_entirely(self) -> None:
        d = build_processing_options(constraints_json='{"timestamp": true}').to_dict()
        assert d["item_unique_constraints"] == {"timestamp": True}

    def test_invalid_constraints_json_keeps_flag_defaults(self, capsys) -> None:
        c = ItemUniqueConstraints(filename=False)
        opts = build_processing_options(constraints=c, constraints_json="{not json")
        assert opts.item_unique_constraints == c.to_dict()
        assert "Warning" in capsys.readouterr().err

    def test_non_object_constraints_json_is_ignored(self, capsys) -> None:
        opts = build_processing_options(constraints_json="[1, 2]")
        assert opts.item_unique_constraints == ItemUniqueConstraints().to_dict()
        assert "must be a JSON object" in capsys.readouterr().err

    def test_to_dict_copies_constraints(self) -> None:
        opts = ProcessingOptions()
        d = opts.to_dict()
        d["item_unique_constraints"]["data"] = False
        assert opts.item_unique_constraints["data"] is True


class TestParseConstraintsJson:
    def test_empty_is_none(self, capsys) -> None:
        assert parse_constraints_json(None) is None
        assert parse_constraints_json("") is None
        assert capsys.readouterr().err == ""

    def test_object(self) -> None:
        assert parse_constraints_json('{"data": false}') == {"data": False}
