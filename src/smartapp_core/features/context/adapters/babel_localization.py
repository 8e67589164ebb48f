"""Locale resolution, time formatting and the default localization initializer, backed by babel."""

import logging
import re
from datetime import datetime
from typing import Any, Mapping, Optional, TYPE_CHECKING

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime, get_timezone, match_skeleton

if TYPE_CHECKING:
    from ..services.execution_context import ExecutionContext

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en-US"

DEFAULT_TIME_OPTIONS = {"hour": "2-digit", "minute": "2-digit"}

# option name -> pattern characters for that field
_TIME_FIELDS = (
    ("hour", "hHkK"),
    ("minute", "m"),
    ("second", "s"),
)


def resolve_locale(locale: Optional[str], default: Optional[str] = FALLBACK_LOCALE) -> Locale:
    """Parse a BCP 47 tag such as ``en-US`` into a babel Locale.
    
    Unknown or malformed tags fall back to ``default`` and then to en-US.
    """
    for candidate in (locale, default, FALLBACK_LOCALE):
        if not candidate:
            continue
        try:
            return Locale.parse(candidate.replace("-", "_"))
        except (UnknownLocaleError, ValueError, TypeError):
            logger.debug(f"Unknown locale '{candidate}', trying fallback")
    return Locale("en", "US")


def _uses_12_hour_clock(locale: Locale) -> bool:
    unquoted = "".join(locale.time_formats["short"].pattern.split("'")[::2])
    return "h" in unquoted or "K" in unquoted


def _strip_literals(pattern: str, transform) -> str:
    """Apply ``transform`` to the parts of a CLDR pattern outside quotes."""
    parts = pattern.split("'")
    for index in range(0, len(parts), 2):
        parts[index] = transform(parts[index])
    return "'".join(parts)


def build_time_pattern(locale: Locale, options: Mapping[str, Any]) -> str:
    """Build a CLDR time pattern for the requested time fields.
    
    Supported options are ``hour``, ``minute`` and ``second`` (``"numeric"``
    or ``"2-digit"``) and ``hour12``. When none of the fields is given all
    three are shown.
    """
    fields = {name: options[name] for name, _ in _TIME_FIELDS if name in options}
    if not fields:
        fields = {"hour": "numeric", "minute": "numeric", "second": "numeric"}
    
    hour12 = options.get("hour12")
    if hour12 is None:
        hour12 = _uses_12_hour_clock(locale)
    
    skeleton = ""
    if "hour" in fields:
        skeleton += "h" if hour12 else "H"
    if "minute" in fields:
        skeleton += "m"
    if "second" in fields:
        skeleton += "s"
    
    skeletons = locale.datetime_skeletons
    best = match_skeleton(skeleton, skeletons)
    pattern = skeletons[best].pattern if best else skeleton
    
    for name, chars in _TIME_FIELDS:
        if name not in fields:
            continue
        width = 2 if fields[name] == "2-digit" else 1
        field_re = re.compile(f"[{chars}]+")
        pattern = _strip_literals(
            pattern,
            lambda text: field_re.sub(lambda m: m.group(0)[0] * width, text),
        )
    
    return pattern


def format_locale_time(
    value: datetime,
    locale: Optional[str],
    options: Optional[Mapping[str, Any]] = None,
    default_locale: Optional[str] = FALLBACK_LOCALE,
) -> str:
    """Format the time portion of ``value`` for a locale.
    
    Args:
        value: Datetime to format; naive values are treated as UTC
        locale: Locale tag of the context, e.g. ``en-US``
        options: Formatting options, see :func:`build_time_pattern`.
            ``timeZone`` converts to the named zone before formatting.
        default_locale: Tag to use when ``locale`` is missing or unknown
        
    Returns:
        Formatted time string
    """
    if not options:
        options = DEFAULT_TIME_OPTIONS
    
    babel_locale = resolve_locale(locale, default_locale)
    pattern = build_time_pattern(babel_locale, options)
    
    tzinfo = None
    if options.get("timeZone"):
        tzinfo = get_timezone(options["timeZone"])
    
    return format_datetime(value, format=pattern, tzinfo=tzinfo, locale=babel_locale)


class AcceptLanguageInitializer:
    """Attach request-scoped locale resources to a context.

    Stores the parsed babel ``Locale`` as ``context.babel_locale`` for
    callers that format their own responses.
    """

    def initialize(self, context: "ExecutionContext", locale: str) -> None:
        context.babel_locale = resolve_locale(locale, context.app.settings.default_locale)
        logger.debug(f"Activated locale {context.babel_locale} for installed app {context.installed_app_id}")
