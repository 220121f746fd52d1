"""Field-level change log between two versions of a record.

Generic over record shape: records are plain mappings (row dicts, model_dump()
output). Values are compared by canonical JSON so nested dicts and lists are
compared by content, independent of key order. Bookkeeping fields
(id, created_at, updated_at) are never reported.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from clinic_access.core.constants import CHANGE_LOG_IGNORED_FIELDS

ChangeLog = dict[str, "FieldChange"]

_MISSING = object()


@dataclass(frozen=True)
class FieldChange:
    """Before/after values of one field."""

    before: Any
    after: Any

    def to_dict(self) -> dict[str, Any]:
        return {"before": self.before, "after": self.after}


def canonical_json(value: Any) -> str:
    """Serialize a value deterministically (sorted keys, no spaces).

    Non-JSON types (datetime, UUID, Decimal) fall back to str().
    """
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


def create_change_log(
    before: Mapping[str, Any] | None,
    after: Mapping[str, Any] | None,
    *,
    ignored_fields: Iterable[str] = CHANGE_LOG_IGNORED_FIELDS,
) -> ChangeLog | None:
    """Return the fields that differ between two record versions, or None.

    The key sets of both records are unioned. A key present on one side only
    is always a change, even when the other side holds None; the absent side
    is reported as None. Returns None (not an empty dict) when no field
    differs, so callers can skip attaching audit detail.

    Args:
        before: Prior version of the record (None treated as empty).
        after: New version of the record (None treated as empty).
        ignored_fields: Keys excluded from comparison.

    Returns:
        Mapping of field name to FieldChange, or None.
    """
    before = before or {}
    after = after or {}
    ignored = frozenset(ignored_fields)
    changes: ChangeLog = {}
    for key in _ordered_union(before, after):
        if key in ignored:
            continue
        before_val = before.get(key, _MISSING)
        after_val = after.get(key, _MISSING)
        if _comparable(before_val) != _comparable(after_val):
            changes[key] = FieldChange(
                before=None if before_val is _MISSING else before_val,
                after=None if after_val is _MISSING else after_val,
            )
    return changes or None


def change_log_to_dict(changes: ChangeLog | None) -> dict[str, dict[str, Any]] | None:
    """JSON-ready form of a change log: {field: {"before": ..., "after": ...}}."""
    if not changes:
        return None
    return {key: change.to_dict() for key, change in changes.items()}


def _comparable(value: Any) -> tuple[bool, str | None]:
    if value is _MISSING:
        return (False, None)
    return (True, canonical_json(value))


def _ordered_union(before: Mapping[str, Any], after: Mapping[str, Any]) -> list[str]:
    # Keys of `before` first, then keys only in `after`; keeps output order stable.
    keys = list(before.keys())
    seen = set(keys)
    keys.extend(k for k in after.keys() if k not in seen)
    return keys
