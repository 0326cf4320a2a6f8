"""Application cache – deterministic keys for configurations."""
from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping

__all__ = ["CacheKey"]


class CacheKey:
    """Factory for deterministic cache key strings."""

    @staticmethod
    def fingerprint(payload: Mapping[str, Any]) -> str:
        """SHA-256 of the canonical JSON form of *payload*.

        Keys are sorted and non-JSON values fall back to ``str`` so the digest
        only depends on the serialised field values.
        """
        canonical = json.dumps(payload, sort_keys=True, default=str, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    @staticmethod
    def for_list(search_id: str, fingerprint: str) -> str:
        return f"list:{search_id}:{fingerprint[:16]}"
