"""Alfred workflow environment.

Alfred exposes the workflow's metadata as ``alfred_*`` environment
variables. A ``.env`` file in the working directory is read as well so the
workflow can be exercised outside of Alfred.
"""

from __future__ import annotations

import platform
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from alfred_todoist import __version__


class AlfredVariables(BaseSettings):
    """Raw ``alfred_*`` variables"""

    version: Optional[str] = None
    workflow_data: Optional[str] = None
    workflow_cache: Optional[str] = None
    workflow_uid: Optional[str] = None
    workflow_bundleid: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="alfred_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class Meta(BaseModel):
    osx: str
    python: str
    alfred: Optional[str] = None
    data_path: Optional[str] = None
    cache_path: Optional[str] = None


class Requirements(BaseModel):
    python: str = "3.9"


class Workflow(BaseModel):
    version: str
    uid: Optional[str] = None
    bundle_id: Optional[str] = None
    workflow_path: Path
    workflow_timestamp: Path
    notifier_path: Path


class Env(BaseModel):
    meta: Meta
    requirements: Requirements
    workflow: Workflow


def load_env(workflow_path: Path | None = None) -> Env:
    """Build an :class:`Env` from the current process environment."""
    variables = AlfredVariables()
    workflow_path = workflow_path or Path.cwd()

    meta = Meta(
        # mac_ver() returns an empty release string off macOS
        osx=platform.mac_ver()[0],
        python=platform.python_version(),
        alfred=variables.version,
        data_path=variables.workflow_data,
        cache_path=variables.workflow_cache,
    )
    workflow = Workflow(
        version=__version__,
        uid=variables.workflow_uid,
        bundle_id=variables.workflow_bundleid,
        workflow_path=workflow_path,
        workflow_timestamp=workflow_path / "workflow.json",
        notifier_path=workflow_path
        / "notifier"
        / "terminal-notifier.app"
        / "Contents"
        / "MacOS"
        / "terminal-notifier",
    )
    return Env(meta=meta, requirements=Requirements(), workflow=workflow)


@lru_cache
def get_env() -> Env:
    """Get cached environment"""
    return load_env()
