"""Versioned migrations for the settings document.

A migration is a ``(version, transform)`` pair. ``transform`` receives a
copy of the document and returns the migrated document; it must not touch
anything else. The version of the last applied migration is stamped in the
document under ``__internal__.migrations.version``.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Iterable, List, NamedTuple

from packaging.version import InvalidVersion, Version

from alfred_todoist.errors import MigrationError
from alfred_todoist.logger import logger

INTERNAL_KEY = "__internal__"
NO_VERSION = "0.0.0"

Document = Dict[str, Any]


class Migration(NamedTuple):
    version: str
    transform: Callable[[Document], Document]


def error_tracking_replaces_anonymous_statistics(document: Document) -> Document:
    document["error_tracking"] = document.get("anonymous_statistics", True)
    document.pop("anonymous_statistics", None)
    return document


MIGRATIONS: List[Migration] = [
    Migration("5.8.4", error_tracking_replaces_anonymous_statistics),
]


def _parse(version: str) -> Version:
    try:
        return Version(version)
    except InvalidVersion as e:
        raise MigrationError(f"Invalid version {version!r}") from e


def get_version(document: Document) -> str:
    """Version the document was last migrated to."""
    internal = document.get(INTERNAL_KEY)
    if not isinstance(internal, dict):
        return NO_VERSION
    migrations = internal.get("migrations")
    if not isinstance(migrations, dict):
        return NO_VERSION
    return migrations.get("version") or NO_VERSION


def set_version(document: Document, version: str) -> Document:
    internal = document.setdefault(INTERNAL_KEY, {})
    internal.setdefault("migrations", {})["version"] = version
    return document


def pending_migrations(
    previous: str, current: str, migrations: Iterable[Migration] = MIGRATIONS
) -> List[Migration]:
    """Migrations newer than ``previous`` and not newer than ``current``, oldest first."""
    low, high = _parse(previous), _parse(current)
    pending = [m for m in migrations if low < _parse(m.version) <= high]
    return sorted(pending, key=lambda m: _parse(m.version))


def run_migrations(
    document: Document, current_version: str, migrations: Iterable[Migration] = MIGRATIONS
) -> Document:
    """Bring ``document`` up to ``current_version``.

    Returns a new document; the one passed in is never modified. When a
    transform fails nothing is applied and :class:`MigrationError` is raised.
    """
    previous = get_version(document)
    result = copy.deepcopy(document)

    for migration in pending_migrations(previous, current_version, migrations):
        logger.debug(f"Running settings migration {migration.version}")
        try:
            result = migration.transform(copy.deepcopy(result))
        except Exception as e:
            raise MigrationError(
                f"Settings migration {migration.version} failed: {e}. The settings were left unchanged."
            ) from e
        set_version(result, migration.version)

    if _parse(get_version(result)) < _parse(current_version):
        set_version(result, current_version)
    return result
