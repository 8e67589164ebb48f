"""Typed accessors over an installed app's config map."""

import math
import re
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from ....core.exceptions import ConfigEntryTypeError
from ..entities.config_entry import (
    ConfigEntry,
    ConfigMap,
    ModeConfigEntry,
    StringConfigEntry,
)
from ..adapters.babel_localization import FALLBACK_LOCALE, format_locale_time

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}
_RADIX_DIGITS = {
    16: re.compile(r"[0-9a-fA-F]+"),
    8: re.compile(r"[0-7]+"),
    2: re.compile(r"[01]+"),
}
_DATE_ONLY_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class InvalidDate:
    """Sentinel returned when a config value cannot be parsed as a date.

    Falsy, so ``if not value`` covers both a missing and an unparseable date.
    """

    _instance: Optional["InvalidDate"] = None

    def __new__(cls) -> "InvalidDate":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INVALID_DATE"

    def __str__(self) -> str:
        return "Invalid Date"


INVALID_DATE = InvalidDate()

DateValue = Union[datetime, InvalidDate]


def to_number(value: Any) -> float:
    """Coerce a config scalar to a float, returning NaN when it is not numeric.

    Blank strings coerce to 0, ``0x``/``0o``/``0b`` prefixes are honored and
    ``Infinity`` is accepted. Python-only spellings such as ``inf``, ``nan``
    and ``1_000`` are rejected.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    if not text:
        return 0.0

    radix = _RADIX_PREFIXES.get(text[:2].lower())
    if radix is not None:
        digits = text[2:]
        if not _RADIX_DIGITS[radix].fullmatch(digits):
            return math.nan
        return float(int(digits, radix))

    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf

    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    return math.nan


def to_date(value: Any) -> DateValue:
    """Parse an ISO 8601 config scalar, returning INVALID_DATE on failure.

    Date-only values are read as midnight UTC.
    """
    if not isinstance(value, str):
        return INVALID_DATE

    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return INVALID_DATE

    if parsed.tzinfo is None and _DATE_ONLY_RE.fullmatch(text):
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_valid_date(value: Optional[DateValue]) -> bool:
    return isinstance(value, datetime)


class ConfigAccessor:
    """Read single and multi-valued settings from a config map.

    Single-valued accessors read the first entry under a key only. A missing
    key, or one with no entries, yields None (False for booleans) instead of
    raising. Multi-valued accessors return None only for a missing key.
    """

    def __init__(
        self,
        config: Optional[ConfigMap],
        locale: Optional[str] = None,
        default_locale: str = FALLBACK_LOCALE,
    ):
        self.config: ConfigMap = config if config is not None else {}
        self.locale = locale
        self.default_locale = default_locale

    def entries(self, name: str) -> Optional[List[ConfigEntry]]:
        """Return every entry under ``name``, or None if the key is absent."""
        return self.config.get(name)

    def _first_string(self, name: str) -> Optional[StringConfigEntry]:
        entries = self.entries(name)
        if not entries:
            return None

        entry = entries[0]
        if not isinstance(entry, StringConfigEntry):
            raise ConfigEntryTypeError(name, "STRING", entry.value_type.value)
        return entry

    def string_value(self, name: str) -> Optional[str]:
        entry = self._first_string(name)
        if entry is None:
            return None
        return entry.value

    def boolean_value(self, name: str) -> bool:
        """True only when the stored string is exactly ``"true"``."""
        entry = self._first_string(name)
        if entry is None:
            return False
        return entry.value == "true"

    def number_value(self, name: str) -> Optional[float]:
        """Numeric value of the first entry; NaN when it does not parse."""
        entry = self._first_string(name)
        if entry is None:
            return None
        return to_number(entry.value)

    def date_value(self, name: str) -> Optional[DateValue]:
        """Datetime of the first entry; INVALID_DATE when it does not parse."""
        entry = self._first_string(name)
        if entry is None:
            return None
        return to_date(entry.value)

    def time_string(
        self, name: str, options: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        """Locale-aware time of day for a date setting.

        Args:
            name: The config key name
            options: Field options such as
                ``{"hour": "numeric", "minute": "2-digit", "second": "2-digit"}``.
                Defaults to two-digit hour and minute.

        Returns:
            Formatted time, or None when the date is missing or invalid
        """
        value = self.date_value(name)
        if not is_valid_date(value):
            return None

        return format_locale_time(
            value,
            self.locale,
            options=options,
            default_locale=self.default_locale,
        )

    def mode_ids(self, name: str) -> Optional[List[Optional[str]]]:
        """Every selected mode id, in config order."""
        entries = self.entries(name)
        if entries is None:
            return None

        mode_ids = []
        for entry in entries:
            if not isinstance(entry, ModeConfigEntry):
                raise ConfigEntryTypeError(name, "MODE", entry.value_type.value)
            mode_ids.append(entry.mode_id)
        return mode_ids
