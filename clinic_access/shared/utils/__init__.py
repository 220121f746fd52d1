"""Shared utilities: datetime and id generators."""

from clinic_access.shared.utils.datetime import ensure_utc, utc_now
from clinic_access.shared.utils.generators import generate_cuid, short_id

__all__ = [
    "generate_cuid",
    "short_id",
    "utc_now",
    "ensure_utc",
]
