"""Stash the hand-maintained workflow files while ``dist/`` is rebuilt.

    python tools/move_files.py copyToTemp    # dist/workflow -> assets
    python tools/move_files.py copyFromTemp  # assets -> dist/workflow
"""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

from loguru import logger

WORKFLOW_DIR = Path("dist") / "workflow"
TEMP_FOLDER = Path("assets")
FILES = ("info.plist", "icon.png", "workflow.json", "check-node.sh")
USAGE = "Please try: python tools/move_files.py [copyToTemp | copyFromTemp]"


def _copy_files(source: Path, target: Path) -> list[Path]:
    target.mkdir(parents=True, exist_ok=True)
    copied = []
    for name in FILES:
        src = source / name
        if not src.is_file():
            logger.warning(f"cp: no such file: {src}")
            continue
        copied.append(Path(shutil.copy2(src, target / name)))
    return copied


def copy_to_temp(cwd: Path | None = None) -> list[Path]:
    cwd = cwd or Path.cwd()
    return _copy_files(cwd / WORKFLOW_DIR, cwd / TEMP_FOLDER)


def copy_from_temp(cwd: Path | None = None) -> list[Path]:
    cwd = cwd or Path.cwd()
    return _copy_files(cwd / TEMP_FOLDER, cwd / WORKFLOW_DIR)


def noop() -> None:
    print(USAGE)


COMMANDS = {
    "copyToTemp": copy_to_temp,
    "copyFromTemp": copy_from_temp,
}


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    command = COMMANDS.get(args[0]) if args else None
    if command is None:
        noop()
    else:
        command()
    return 0


if __name__ == "__main__":
    sys.exit(main())
