from __future__ import annotations

import uuid as _uuid


def uuid() -> str:
    """Return a fresh random (version 4) UUID string."""
    return str(_uuid.uuid4())
