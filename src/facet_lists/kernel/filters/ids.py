"""Filter ids – correlation keys letting several filters share one facet."""
from __future__ import annotations

import hashlib
from typing import Collection


def generate_filter_id(facet_id: str, existing: Collection[str] = ()) -> str:
    """Return ``md5(facet_id)``, salted with an increasing counter until it is
    absent from *existing*.

    The result is only stable within one configuration-building session and
    must not be persisted as an identity.
    """
    filter_id = _md5(facet_id)
    attempt = 1
    while filter_id in existing:
        filter_id = _md5(f"{facet_id}{attempt}")
        attempt += 1
    return filter_id


def _md5(value: str) -> str:
    return hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()


__all__ = ["generate_filter_id"]
