from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Return a fresh primary key such as ``c-3f2b...``.

    Ids are string keys; the prefix only tells entity kinds apart in logs.
    """
    return f"{prefix}-{uuid.uuid4().hex}"
