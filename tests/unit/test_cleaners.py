"""Tests for field cleaners and the row cleaner."""

from datetime import date, datetime

import pytest

from dbsampler.cleaners import (
    CleanerRegistry,
    FieldCleaner,
    FunctionCleaner,
    RowCleaner,
    cleaner_registry,
    field_cleaner,
    parse_directive,
)
from dbsampler.errors import ConfigurationError


def clean(directive, value, row=None):
    alias, args = parse_directive(directive)
    cleaner = cleaner_registry.get(alias)
    return cleaner.clean(value, row or {}, *cleaner.prepare_args(args))


class UpperCleaner(FieldCleaner):
    def clean(self, value, row, *args):
        return value.upper()


class TestParseDirective:
    def test_alias_only(self):
        assert parse_directive("fakeemail") == ("fakeemail", [])

    def test_alias_with_arguments(self):
        assert parse_directive("Fixed:a:b") == ("fixed", ["a", "b"])


class TestBuiltinCleaners:
    """Test the cleaners available to every migration."""

    def test_constant_cleaners(self):
        assert clean("null", "secret") is None
        assert clean("empty", "secret") == ""
        assert clean("zero", 42) == 0

    def test_fixed_keeps_colons_in_value(self):
        assert clean("fixed:10:30", "anything") == "10:30"

    def test_truncate(self):
        assert clean("truncate:3", "abcdef") == "abc"
        assert clean("truncate:3", None) is None

    def test_hash_is_stable_and_truncatable(self):
        assert clean("hash", "value") == clean("hash", "value")
        assert len(clean("hash", "value")) == 64
        assert clean("hash:8", "value") == clean("hash", "value")[:8]

    def test_random_lengths(self):
        digits = clean("randomdigits:6", "x")
        assert len(digits) == 6 and digits.isdigit()
        letters = clean("randomstring:5", "x")
        assert len(letters) == 5 and letters.isalpha()

    def test_integer(self):
        assert clean("integer", "12") == 12
        assert clean("integer", "") is None

    @pytest.mark.parametrize(
        "alias",
        [
            "fakefirstname",
            "fakelastname",
            "fakename",
            "fakeemail",
            "fakephone",
            "fakestreetaddress",
            "fakepostcode",
        ],
    )
    def test_fakes_are_deterministic_and_preserve_null(self, alias):
        assert clean(alias, "Jane Doe") == clean(alias, "Jane Doe")
        assert clean(alias, "Jane Doe") != "Jane Doe"
        assert clean(alias, None) is None

    def test_fake_email_domain(self):
        assert clean("fakeemail", "a@b.com").endswith("@example.com")
        assert clean("fakeemail:test.org", "a@b.com").endswith("@test.org")

    def test_date_of_birth_keeps_only_year(self):
        assert clean("dateofbirth", date(1984, 7, 19)) == date(1984, 1, 1)
        assert clean("dateofbirth", datetime(1984, 7, 19, 10, 5)) == datetime(
            1984, 1, 1
        )
        assert clean("dateofbirth", "1984-07-19") == "1984-01-01"
        assert clean("dateofbirth", "1984-07-19 10:05:00") == "1984-01-01 00:00:00"


class TestCleanerRegistry:
    def test_unknown_alias_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            cleaner_registry.get("scramble")
        assert "Unrecognised cleaner type 'scramble'" in str(exc_info.value)

    def test_register_requires_field_cleaner(self):
        with pytest.raises(TypeError):
            CleanerRegistry().register(lambda value, row: value, "identity")

    def test_copy_is_independent(self):
        registry = cleaner_registry.copy()
        registry.register(UpperCleaner(), "upper")
        assert "upper" in registry
        assert "upper" not in cleaner_registry

    def test_field_cleaner_decorator_registers_function(self):
        registry = CleanerRegistry()

        @field_cleaner("reverse", registry=registry)
        def reverse(value, row):
            return value[::-1]

        assert isinstance(registry.get("reverse"), FunctionCleaner)
        assert registry.get("reverse").clean("abc", {}) == "cba"


class TestRowCleaner:
    """Test applying a table's clean rules to rows."""

    def test_output_has_same_keys_and_cleans_only_configured_columns(self, make_spec):
        spec = make_spec(cleanFields={"email": "null"})
        row = {"id": 1, "email": "a@b.com", "name": "Ann"}

        cleaned = RowCleaner(spec).clean_row(row)

        assert cleaned == {"id": 1, "email": None, "name": "Ann"}
        assert row["email"] == "a@b.com"

    def test_directives_apply_left_to_right(self, make_spec):
        spec = make_spec(cleanFields={"code": ["fixed:abcdef", "truncate:2"]})
        assert RowCleaner(spec).clean_row({"code": "x"}) == {"code": "ab"}

    def test_later_columns_see_earlier_cleaned_values(self, make_spec):
        registry = cleaner_registry.copy()

        @field_cleaner("copyname", registry=registry)
        def copy_name(value, row):
            return row["name"]

        spec = make_spec(cleanFields={"name": "fixed:Anon", "display": "copyname"})
        cleaned = RowCleaner(spec, registry).clean_row({"name": "Ann", "display": "Ann"})
        assert cleaned == {"name": "Anon", "display": "Anon"}

    def test_unknown_alias_fails_on_construction(self, make_spec):
        with pytest.raises(ConfigurationError) as exc_info:
            RowCleaner(make_spec("users", cleanFields={"email": "scramble"}))
        assert exc_info.value.table == "users"

    @pytest.mark.parametrize("directive", ["truncate", "truncate:x", "null:1"])
    def test_bad_arguments_fail_on_construction(self, make_spec, directive):
        with pytest.raises(ConfigurationError):
            RowCleaner(make_spec(cleanFields={"email": directive}))

    def test_missing_column_raises(self, make_spec):
        cleaner = RowCleaner(make_spec(cleanFields={"email": "null"}))
        with pytest.raises(ConfigurationError) as exc_info:
            cleaner.clean_row({"id": 1})
        assert "Cannot clean column 'email'" in str(exc_info.value)

    def test_custom_registry_cleaner(self, make_spec):
        registry = cleaner_registry.copy()
        registry.register(UpperCleaner(), "upper")
        cleaner = RowCleaner(make_spec(cleanFields={"name": "upper"}), registry)
        assert cleaner.clean_row({"name": "ann"}) == {"name": "ANN"}
        assert cleaner.columns == ["name"]
