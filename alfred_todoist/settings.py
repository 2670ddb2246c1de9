from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional

from alfred_todoist import __version__, workflow
from alfred_todoist.env import get_env
from alfred_todoist.errors import Errors, SchemaValidationError, UnknownKeyError, raise_error
from alfred_todoist.logger import logger
from alfred_todoist.migrations import INTERNAL_KEY, MIGRATIONS, Migration, get_version, run_migrations
from alfred_todoist.settings_schema import (
    SETTINGS_SCHEMA,
    SettingRule,
    default_settings,
    validate_document,
    validate_setting,
)

SETTINGS_FILE = "settings.json"

_instance: Optional["SettingsStore"] = None


class SettingsStore:
    """Validated settings persisted to ``<path>/settings.json``.

    The file is created on first open with the defaults filled in, and
    rewritten after every change. Stored documents from older workflow
    versions are migrated before use.
    """

    def __init__(
        self,
        path: str | os.PathLike | None,
        *,
        version: str = __version__,
        schema: Mapping[str, SettingRule] = SETTINGS_SCHEMA,
        migrations: Iterable[Migration] = MIGRATIONS,
        uuid_factory: Callable[[], str] = workflow.uuid,
    ) -> None:
        if not path:
            raise_error(Errors.InvalidFilePath, f"Expected a valid settings path, got {path!r}")

        self._path = Path(path) / SETTINGS_FILE
        self._schema = schema
        self._defaults = default_settings(uuid_factory())

        stored = self._load()
        if not self._path.exists():
            logger.debug(f"Creating settings file {self._path}")

        document = run_migrations({**self._defaults, **stored}, version, migrations)
        self._data: dict[str, Any] = {}
        self._save(dict(validate_document(document, self._schema)))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def version(self) -> str:
        """Workflow version the document was last migrated to."""
        return get_version(self._data)

    def _load(self) -> dict[str, Any]:
        """Load settings from disk."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable settings file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self._path}: root is not an object")
            return {}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        """Save ``data`` to disk, then make it the current document."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        self._data = data

    def _check_key(self, key: str) -> SettingRule:
        if key not in self._schema:
            raise UnknownKeyError(f"Unknown setting {key!r}", key=key)
        return self._schema[key]

    def _check_writable(self, key: str, value: Any = None) -> None:
        if self._check_key(key).read_only:
            raise SchemaValidationError(f"{key!r} is read-only", key=key, value=value)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value, falling back to its declared default."""
        self._check_key(key)
        if key in self._data:
            return self._data[key]
        return self._defaults.get(key, default)

    def has(self, key: str) -> bool:
        self._check_key(key)
        return key in self._data

    def set(self, key: str, value: Any) -> None:
        """Validate a setting value and save it to disk."""
        self._check_writable(key, value)
        validate_setting(key, value, self._schema)
        self._save({**self._data, key: value})
        logger.debug(f"Setting {key} updated")

    def update(self, values: Mapping[str, Any]) -> None:
        """Set several settings at once; nothing is written unless all are valid."""
        for key, value in values.items():
            self._check_writable(key, value)
            validate_setting(key, value, self._schema)
        self._save({**self._data, **values})

    def delete(self, key: str) -> None:
        self._check_writable(key)
        if key in self._data:
            self._save({k: v for k, v in self._data.items() if k != key})

    def reset(self, *keys: str) -> None:
        """Restore the declared defaults of ``keys``."""
        for key in keys:
            self._check_writable(key)
        data = dict(self._data)
        for key in keys:
            if key in self._defaults:
                data[key] = self._defaults[key]
            else:
                data.pop(key, None)
        self._save(data)

    def clear(self) -> None:
        """Reset every setting to its default, keeping the uuid and migration state."""
        data = {**self._defaults, "uuid": self._data.get("uuid", self._defaults["uuid"])}
        if INTERNAL_KEY in self._data:
            data[INTERNAL_KEY] = self._data[INTERNAL_KEY]
        self._save(data)

    def as_dict(self) -> dict[str, Any]:
        """Copy of the settings without internal metadata."""
        return {k: copy.deepcopy(v) for k, v in self._data.items() if k != INTERNAL_KEY}

    def __contains__(self, key: object) -> bool:
        return key in self._schema and key in self._data

    def __len__(self) -> int:
        return len(self.as_dict())

    def __repr__(self) -> str:
        return f"SettingsStore(path={str(self._path)!r}, version={self.version!r})"


def settings_store(path: str | os.PathLike | None = None) -> SettingsStore:
    """A store instance to query the settings.json config file.

    The first call creates the store for ``path`` (the workflow data
    directory by default); later calls return that same store and ignore
    ``path``.
    """
    global _instance
    if _instance is not None:
        return _instance

    if path is None:
        path = get_env().meta.data_path
    _instance = SettingsStore(path)
    return _instance
