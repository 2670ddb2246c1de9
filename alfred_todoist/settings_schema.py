"""Declarative rules for every workflow setting.

The rules live in :data:`SETTINGS_SCHEMA`, a plain table keyed by setting
name. :func:`validate_setting` checks one value against its rule and knows
nothing about the other settings.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, TypeAdapter, ValidationError

from alfred_todoist.errors import SchemaValidationError, UnknownKeyError

SECONDS_IN_YEAR = 31556926
SECONDS_IN_MONTH = 2629743
SECONDS_IN_WEEK = 604800
BETWEEN_SECOND_AND_YEAR = f"In seconds. Must be a number between 1 and {SECONDS_IN_YEAR} (year)"

LANGUAGES = (
    "da",
    "de",
    "en",
    "es",
    "fi",
    "fr",
    "it",
    "ja",
    "ko",
    "nl",
    "pl",
    "pt_BR",
    "ru",
    "sv",
    "tr",
    "zh_CN",
    "zh_TW",
)
LOG_LEVEL_NAMES = ("trace", "debug", "info", "warn", "error", "silent")
FILTER_WRAPPERS = ('"', "'", "`")


class SettingRule(BaseModel):
    """Constraint attached to one setting."""

    model_config = ConfigDict(frozen=True)

    type: Literal["string", "integer", "boolean"]
    description: str = ""
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    enum: Optional[Tuple[str, ...]] = None
    pattern: Optional[str] = None
    max_length: Optional[int] = None
    read_only: bool = False
    deprecated: bool = False


SETTINGS_SCHEMA: Dict[str, SettingRule] = {
    "token": SettingRule(
        type="string",
        description="Must be a valid todoist token (40 chars and only 0-9 and a-f)",
        pattern=r"(?:^[0-9a-fA-F]{40}$)|^$",
    ),
    "language": SettingRule(
        type="string",
        description=f"Must be one of: {', '.join(LANGUAGES)}",
        enum=LANGUAGES,
    ),
    "max_items": SettingRule(
        type="integer",
        description="Must be a number between 1 and 20",
        minimum=1,
        maximum=20,
    ),
    "cache_timeout": SettingRule(
        type="integer",
        description=BETWEEN_SECOND_AND_YEAR,
        minimum=1,
        maximum=SECONDS_IN_YEAR,
    ),
    "cache_timeout_tasks": SettingRule(
        type="integer",
        description=BETWEEN_SECOND_AND_YEAR,
        minimum=1,
        maximum=SECONDS_IN_YEAR,
    ),
    "filter_wrapper": SettingRule(
        type="string",
        description="Configure the filter string wrapper for tasks, (must be ', \" or `)",
        pattern='["\'`]',
        max_length=1,
    ),
    "update_checks": SettingRule(
        type="integer",
        description=BETWEEN_SECOND_AND_YEAR,
        minimum=1,
        maximum=SECONDS_IN_YEAR,
    ),
    "pre_releases": SettingRule(
        type="boolean",
        description="Be notified of alpha and beta releases",
    ),
    "anonymous_statistics": SettingRule(
        type="boolean",
        description="DEPRECATED: automatically replaced with error_tracking property",
        deprecated=True,
    ),
    "error_tracking": SettingRule(
        type="boolean",
        description="Anonymous error tracking",
    ),
    "log_level": SettingRule(
        type="string",
        description="The amount of logging output",
        enum=LOG_LEVEL_NAMES,
    ),
    "last_update": SettingRule(
        type="string",
        description="The time since last checked for workflow updates",
    ),
    "uuid": SettingRule(
        type="string",
        description="This should be left unchanged",
        pattern=r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
        read_only=True,
    ),
}

SETTING_KEYS = frozenset(SETTINGS_SCHEMA)


def default_settings(uuid: str) -> Dict[str, Any]:
    """Default document for a new store, seeded with ``uuid``."""
    return {
        "token": "",
        "language": "en",
        "max_items": 9,
        "cache_timeout": SECONDS_IN_MONTH,
        "cache_timeout_tasks": SECONDS_IN_WEEK,
        "filter_wrapper": '"',
        "update_checks": SECONDS_IN_WEEK,
        "pre_releases": False,
        "error_tracking": True,
        "log_level": "error",
        # Two seconds past the epoch, i.e. "never checked"
        "last_update": "1970-01-01T00:00:02.000Z",
        "uuid": uuid,
    }


@lru_cache(maxsize=None)
def _adapter(rule: SettingRule) -> TypeAdapter:
    if rule.type == "boolean":
        return TypeAdapter(StrictBool)
    if rule.type == "integer":
        return TypeAdapter(Annotated[int, Field(strict=True, ge=rule.minimum, le=rule.maximum)])
    if rule.enum is not None:
        return TypeAdapter(Literal[rule.enum])
    return TypeAdapter(
        Annotated[str, Field(strict=True, pattern=rule.pattern, max_length=rule.max_length)]
    )


def validate_setting(key: str, value: Any, table: Mapping[str, SettingRule] = SETTINGS_SCHEMA) -> Any:
    """Check ``value`` against the rule for ``key`` and return it unchanged.

    Raises :class:`UnknownKeyError` when ``key`` has no rule and
    :class:`SchemaValidationError` when the value breaks it.
    """
    try:
        rule = table[key]
    except KeyError:
        raise UnknownKeyError(f"Unknown setting {key!r}", key=key) from None

    try:
        _adapter(rule).validate_python(value)
    except ValidationError as e:
        reason = e.errors()[0]["msg"]
        raise SchemaValidationError(
            f"Invalid value {value!r} for {key!r}: {reason}. {rule.description}".rstrip(),
            key=key,
            value=value,
        ) from e
    return value


def validate_document(
    document: Mapping[str, Any], table: Mapping[str, SettingRule] = SETTINGS_SCHEMA
) -> Mapping[str, Any]:
    """Validate every setting present in ``document``.

    Keys without a rule (internal metadata, settings from newer workflow
    versions) are left alone.
    """
    for key, value in document.items():
        if key in table:
            validate_setting(key, value, table)
    return document
