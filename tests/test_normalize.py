"""Tests for the normalizer: the testable properties of safe display text."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from types import SimpleNamespace
from uuid import UUID

import pytest
from jinja2 import Undefined
from markupsafe import Markup

from safe_display import normalize
from safe_display.core.config import NormalizeConfig
from safe_display.core.normalize import normalize_text


class Term(Enum):
    ONE = "Term 1"


# ════════════════════════════════════════════════════════════════════
# Nullish and primitives
# ════════════════════════════════════════════════════════════════════


class TestNullishAndPrimitives:
    def test_none_is_empty_string(self):
        assert normalize(None) == ""

    def test_jinja_undefined_is_empty_string(self):
        assert normalize(Undefined(name="missing")) == ""

    def test_numbers_and_booleans(self):
        assert normalize(42) == "42"
        assert normalize(True) == "true"
        assert normalize(False) == "false"
        assert normalize(Decimal("12.50")) == "12.50"

    @pytest.mark.parametrize("s", ["", "Form 2", "  padded  ", "[Object]", "{\"a\": 1}"])
    def test_strings_pass_through_unchanged(self, s):
        assert normalize(s) == s
        assert normalize(normalize(s)) == s

    def test_bytes_decoded_as_utf8(self):
        assert normalize("Zoë".encode("utf-8")) == "Zoë"

    def test_enum_uses_its_value(self):
        assert normalize(Term.ONE) == "Term 1"

    def test_uuid_is_primitive(self):
        u = UUID("12345678-1234-5678-1234-567812345678")
        assert normalize(u) == str(u)

    def test_callable_gets_placeholder(self):
        assert normalize(len) == "[Function]"


# ════════════════════════════════════════════════════════════════════
# Dates
# ════════════════════════════════════════════════════════════════════


class TestDates:
    def test_default_short_date_has_no_zero_padding(self):
        assert normalize(date(2024, 3, 7)) == "3/7/2024"

    def test_datetime_drops_the_time(self):
        assert normalize(datetime(2024, 11, 30, 14, 5)) == "11/30/2024"

    def test_configured_format(self):
        cfg = NormalizeConfig(date_format="%d/%m/%Y")
        assert normalize(date(2024, 3, 7), config=cfg) == "07/03/2024"


# ════════════════════════════════════════════════════════════════════
# Arrays
# ════════════════════════════════════════════════════════════════════


class TestArrays:
    def test_join_with_comma_space_and_empty_null_segments(self):
        assert normalize([1, "a", None]) == "1, a, "

    def test_nested_records_use_labels(self):
        subjects = [{"id": 1, "name": "Maths"}, {"id": 2, "code": "PHY"}]
        assert normalize(subjects) == "Maths, PHY"

    def test_tuple_and_empty_list(self):
        assert normalize(("x", 2)) == "x, 2"
        assert normalize([]) == ""

    def test_custom_separator(self):
        cfg = NormalizeConfig(separator=" / ")
        assert normalize(["a", "b"], config=cfg) == "a / b"

    def test_markup_inside_list_contributes_its_text(self):
        assert normalize([Markup("<b>A</b>"), "B"]) == "<b>A</b>, B"

    def test_depth_cap_substitutes_placeholder(self):
        cfg = NormalizeConfig(max_depth=2)
        assert normalize([[["deep"]]], config=cfg) == "[Object]"
        assert normalize([["ok"]], config=cfg) == "ok"

    def test_self_containing_list_terminates(self):
        loop: list = ["x"]
        loop.append(loop)
        out = normalize(loop, config=NormalizeConfig(max_depth=3))
        assert out == "x, x, x, [Object]"

    def test_sets_join_in_sorted_order(self):
        subjects = {"Maths", "Art", "Biology", "Chem"}
        assert normalize(subjects) == "Art, Biology, Chem, Maths"
        assert normalize(frozenset(subjects)) == "Art, Biology, Chem, Maths"

    def test_set_text_is_stable_across_hash_seeds(self):
        script = "from safe_display import normalize; print(normalize({'Maths', 'Art', 'Biology', 'Chem'}))"
        outputs = set()
        for seed in ("1", "2", "3"):
            env = os.environ.copy()
            env["PYTHONHASHSEED"] = seed
            proc = subprocess.run([sys.executable, "-c", script], capture_output=True, text=True, env=env)
            assert proc.returncode == 0, proc.stderr
            outputs.add(proc.stdout)
        assert outputs == {"Art, Biology, Chem, Maths\n"}


# ════════════════════════════════════════════════════════════════════
# Records
# ════════════════════════════════════════════════════════════════════


class TestRecords:
    def test_first_and_last_name(self):
        assert normalize({"id": "x1", "firstName": "Jane", "lastName": "Doe"}) == "Jane Doe"

    def test_partial_name_falls_through_to_id(self):
        assert normalize({"id": "x1", "firstName": "Jane"}) == "x1"

    def test_display_name_wins_over_code(self):
        assert normalize({"id": "x1", "displayName": "Class 5A", "code": "C5A"}) == "Class 5A"

    def test_code_when_no_name_fields(self):
        assert normalize({"id": "x1", "code": "SUBJ-01"}) == "SUBJ-01"

    def test_mongo_underscore_id(self):
        assert normalize({"_id": "64f1c2", "name": "Form 1"}) == "Form 1"
        assert normalize({"_id": {"$oid": "64f1c2"}}) == "64f1c2"

    def test_dataclass_record(self):
        @dataclass
        class Teacher:
            id: int
            first_name: str
            last_name: str

        assert normalize(Teacher(7, "Musa", "Ali")) == "Musa Ali"


# ════════════════════════════════════════════════════════════════════
# Opaque objects
# ════════════════════════════════════════════════════════════════════


class TestOpaque:
    def test_structural_serialization_round_trips(self):
        out = normalize({"a": 1, "b": [2, 3]})
        assert json.loads(out) == {"a": 1, "b": [2, 3]}

    def test_circular_object_gets_placeholder(self):
        obj: dict = {"name": "loop"}
        obj["self"] = obj
        assert normalize(obj) == "[Object]"

    def test_unserializable_value_gets_placeholder(self):
        class Blob:
            pass

        assert normalize(Blob()) == "[Object]"
        assert normalize({"blob": Blob()}) == "[Object]"

    def test_dates_inside_opaque_objects_become_iso(self):
        out = normalize({"term_start": date(2024, 1, 8)})
        assert json.loads(out) == {"term_start": "2024-01-08"}

    def test_empty_id_is_not_a_record(self):
        out = normalize({"id": "", "note": "draft"})
        assert json.loads(out) == {"id": "", "note": "draft"}

    def test_custom_placeholder(self):
        obj: dict = {}
        obj["me"] = obj
        assert normalize(obj, config=NormalizeConfig(placeholder="?")) == "?"

    def test_sets_inside_opaque_objects_are_sorted(self):
        out = normalize({"tags": {"prefect", "choir", "athletics"}})
        assert out == '{"tags": ["athletics", "choir", "prefect"]}'

    def test_attribute_object_serializes_its_fields(self):
        out = normalize(SimpleNamespace(score=88, grade="A"))
        assert json.loads(out) == {"score": 88, "grade": "A"}

    def test_plain_class_instance_serializes_its_fields(self):
        class Result:
            def __init__(self):
                self.term = "T2"
                self.marks = [70, 81]

        assert json.loads(normalize({"result": Result()})) == {"result": {"term": "T2", "marks": [70, 81]}}

    def test_self_referencing_attribute_object_gets_placeholder(self):
        node = SimpleNamespace(label="loop")
        node.me = node
        assert normalize(node) == "[Object]"


# ════════════════════════════════════════════════════════════════════
# UI elements
# ════════════════════════════════════════════════════════════════════


class TestUIElements:
    def test_markup_returned_identically(self):
        m = Markup("<em>Top of class</em>")
        assert normalize(m) is m

    def test_normalize_text_flattens_elements(self):
        class Widget:
            def __html__(self):
                return "<span>w</span>"

        w = Widget()
        assert normalize(w) is w
        assert normalize_text(w) == "<span>w</span>"
