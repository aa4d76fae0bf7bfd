"""Tests for the identified-record label resolver."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from safe_display import resolve_label
from safe_display.core.config import NormalizeConfig
from safe_display.core.resolve import collapse_whitespace, identifier_text, person_name


class TestResolveLabel:
    def test_display_name_first(self):
        rec = {"id": 1, "displayName": "Grade 7 Blue", "name": "G7B", "code": "7B"}
        assert resolve_label(rec) == "Grade 7 Blue"

    def test_snake_case_display_name(self):
        assert resolve_label({"id": 1, "display_name": "Chemistry Lab"}) == "Chemistry Lab"

    def test_name_over_person_fields(self):
        rec = {"id": 1, "name": "Form 1", "firstName": "A", "lastName": "B"}
        assert resolve_label(rec) == "Form 1"

    def test_blank_name_is_skipped(self):
        assert resolve_label({"id": 1, "name": "  ", "code": "ENG"}) == "ENG"

    def test_person_name_collapses_whitespace(self):
        rec = {"id": 9, "first_name": " Ada ", "last_name": "Lovelace  "}
        assert resolve_label(rec) == "Ada Lovelace"

    @pytest.mark.parametrize(
        "rec",
        [
            {"id": "s-7", "firstName": "Jane"},
            {"id": "s-7", "lastName": "Doe"},
            {"id": "s-7", "firstName": "Jane", "lastName": ""},
        ],
    )
    def test_partial_names_fall_through(self, rec):
        assert resolve_label(rec) == "s-7"

    def test_numeric_code(self):
        assert resolve_label({"id": "x", "code": 101}) == "101"

    def test_non_text_name_is_ignored(self):
        assert resolve_label({"id": "x", "name": {"en": "Maths"}}) == "x"
        assert resolve_label({"id": "x", "name": True}) == "x"

    def test_numeric_and_zero_ids(self):
        assert resolve_label({"id": 42}) == "42"
        assert resolve_label({"id": 0}) == "0"

    def test_attribute_record(self):
        teacher = SimpleNamespace(id="t1", firstName="Grace", lastName="Hopper")
        assert resolve_label(teacher) == "Grace Hopper"

    def test_record_without_identifier_gets_placeholder(self):
        assert resolve_label({"note": "x"}) == "[Object]"
        assert resolve_label({"note": "x"}, config=NormalizeConfig(placeholder="-")) == "-"


class TestHelpers:
    def test_person_name(self):
        assert person_name({"firstName": "Jo", "lastName": "Ng"}) == "Jo Ng"
        assert person_name({"firstName": "Jo"}) is None

    def test_collapse_whitespace(self):
        assert collapse_whitespace("  a \t b\n c ") == "a b c"

    def test_identifier_text_unwraps_oid(self):
        assert identifier_text({"$oid": "5f0c"}) == "5f0c"

    def test_identifier_text_falls_back_to_repr(self):
        class NoStr:
            def __str__(self):
                raise ValueError("nope")

            def __repr__(self):
                return "<NoStr>"

        assert identifier_text(NoStr()) == "<NoStr>"

    def test_identifier_text_placeholder_when_nothing_works(self):
        class Hostile:
            def __str__(self):
                raise ValueError("nope")

            def __repr__(self):
                raise ValueError("nope")

        assert identifier_text(Hostile(), config=NormalizeConfig(placeholder="?")) == "?"
