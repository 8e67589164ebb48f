"""Tests for typed config accessors."""

import math
from datetime import datetime, timezone

import pytest

from smartapp_core.core.exceptions import ConfigEntryTypeError
from smartapp_core.features.context import (
    INVALID_DATE,
    ConfigAccessor,
    create_execution_context,
    is_valid_date,
)
from smartapp_core.features.context.entities import parse_config
from smartapp_core.features.context.services import to_date, to_number
from tests.conftest import SAMPLE_CONFIG, make_payload


def accessor_for(values, locale="en-US"):
    raw = {name: [{"stringConfig": {"value": value}}] for name, value in values.items()}
    return ConfigAccessor(parse_config(raw), locale=locale)


def normalize_spaces(text):
    return text.replace("\u202f", " ").replace("\xa0", " ")


@pytest.fixture
def accessor():
    return ConfigAccessor(parse_config(SAMPLE_CONFIG), locale="en-US")


class TestStringAndBoolean:

    def test_string_value(self, accessor):
        assert accessor.string_value("threshold") == "72"

    def test_string_value_missing_key(self, accessor):
        assert accessor.string_value("missing") is None

    def test_boolean_true_only_for_exact_string(self, accessor):
        assert accessor.boolean_value("enabled") is True
        assert accessor.boolean_value("disabled") is False
        assert accessor.boolean_value("missing") is False

    @pytest.mark.parametrize("value", ["TRUE", "True", "1", "yes", ""])
    def test_boolean_is_string_comparison(self, value):
        assert accessor_for({"flag": value}).boolean_value("flag") is False

    def test_missing_config_map(self):
        empty = ConfigAccessor(None)

        assert empty.string_value("anything") is None
        assert empty.boolean_value("anything") is False
        assert empty.number_value("anything") is None
        assert empty.date_value("anything") is None
        assert empty.time_string("anything") is None
        assert empty.mode_ids("anything") is None

    def test_first_entry_only(self):
        config = parse_config(
            {"names": [{"stringConfig": {"value": "first"}}, {"stringConfig": {"value": "second"}}]}
        )

        assert ConfigAccessor(config).string_value("names") == "first"


class TestNumberValue:

    def test_number(self, accessor):
        assert accessor.number_value("threshold") == 72.0

    def test_missing_key(self, accessor):
        assert accessor.number_value("missing") is None

    def test_unparseable_value_is_nan(self):
        assert math.isnan(accessor_for({"n": "seventy"}).number_value("n"))

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("3.5", 3.5),
            ("-2", -2.0),
            (" 12 ", 12.0),
            ("", 0.0),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("0x1A", 26.0),
            ("0b101", 5.0),
            ("Infinity", math.inf),
            ("-Infinity", -math.inf),
        ],
    )
    def test_coercion(self, text, expected):
        assert to_number(text) == expected

    @pytest.mark.parametrize(
        "text", ["inf", "nan", "1_000", "12abc", "0xZZ", "0x1_0", "0x 10", "0x", "0o9", "0b2", "-0x10", None]
    )
    def test_coercion_failures(self, text):
        assert math.isnan(to_number(text))


class TestDateAndTime:

    def test_date_value(self, accessor):
        assert accessor.date_value("startTime") == datetime(2019, 3, 18, 14, 5, tzinfo=timezone.utc)

    def test_date_only_is_utc_midnight(self):
        assert to_date("2019-03-18") == datetime(2019, 3, 18, tzinfo=timezone.utc)

    def test_invalid_date_sentinel(self):
        value = accessor_for({"when": "not a date"}).date_value("when")

        assert value is INVALID_DATE
        assert not value
        assert not is_valid_date(value)

    def test_missing_date(self, accessor):
        assert accessor.date_value("missing") is None

    def test_time_string_defaults_to_two_digit_hour_and_minute(self, accessor):
        assert normalize_spaces(accessor.time_string("startTime")) == "02:05 PM"

    def test_time_string_24_hour_locale(self):
        accessor = ConfigAccessor(parse_config(SAMPLE_CONFIG), locale="de-DE")

        assert accessor.time_string("startTime") == "14:05"

    def test_time_string_with_options(self, accessor):
        options = {"hour": "numeric", "minute": "2-digit", "second": "2-digit"}

        assert normalize_spaces(accessor.time_string("startTime", options)) == "2:05:00 PM"

    def test_time_string_time_zone_option(self):
        accessor = ConfigAccessor(parse_config(SAMPLE_CONFIG), locale="de-DE")
        options = {"hour": "2-digit", "minute": "2-digit", "timeZone": "Europe/Berlin"}

        assert accessor.time_string("startTime", options) == "15:05"

    def test_time_string_unknown_locale_uses_default(self):
        accessor = ConfigAccessor(parse_config(SAMPLE_CONFIG), locale="zz-ZZ", default_locale="de-DE")

        assert accessor.time_string("startTime") == "14:05"

    def test_time_string_invalid_or_missing_date(self, accessor):
        assert accessor_for({"when": "garbage"}).time_string("when") is None
        assert accessor.time_string("missing") is None


class TestModeIds:

    def test_all_modes_in_order(self, accessor):
        assert accessor.mode_ids("modes") == ["mode-home", "mode-away", "mode-night"]

    def test_missing_key(self, accessor):
        assert accessor.mode_ids("missing") is None

    def test_wrong_entry_kind(self, accessor):
        with pytest.raises(ConfigEntryTypeError):
            accessor.mode_ids("threshold")

    def test_empty_selection_is_empty_list(self):
        config = parse_config(
            {"none": [], "scenes": [{"valueType": "SCENE", "sceneConfig": {"sceneId": "s-1"}}]}
        )

        accessor = ConfigAccessor(config)

        assert accessor.mode_ids("none") == []
        assert accessor.mode_ids("scenes") == []


class TestEmptyEntries:
    """A key with no entries is present but holds no scalar value."""

    def test_scalars_read_as_absent(self):
        accessor = ConfigAccessor(parse_config({"blank": []}))

        assert accessor.entries("blank") == []
        assert accessor.entries("missing") is None
        assert accessor.string_value("blank") is None
        assert accessor.boolean_value("blank") is False
        assert accessor.number_value("blank") is None
        assert accessor.date_value("blank") is None


class TestContextDelegation:
    """ExecutionContext exposes the accessors under config_* names."""

    def test_context_accessors(self, app):
        context = create_execution_context(app, make_payload("EVENT"))

        assert context.config_string_value("threshold") == "72"
        assert context.config_boolean_value("enabled") is True
        assert context.config_boolean_value("missing") is False
        assert context.config_number_value("threshold") == 72.0
        assert context.config_date_value("startTime").year == 2019
        assert normalize_spaces(context.config_time_string("startTime")) == "02:05 PM"
        assert context.config_mode_ids("modes") == ["mode-home", "mode-away", "mode-night"]

    def test_context_empty_mode_selection(self, app):
        context = create_execution_context(app, make_payload("PROACTIVE", config={"m": []}))

        assert context.config_mode_ids("m") == []
        assert context.config_mode_ids("missing") is None

    def test_uninstall_context_has_no_config(self, app):
        context = create_execution_context(app, make_payload("UNINSTALL"))

        assert context.config_string_value("threshold") is None
        assert context.config_boolean_value("enabled") is False
