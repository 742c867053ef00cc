"""Small pure utilities (ids, datetimes, redaction)."""

from tenantguard.shared.utils.datetime import ensure_utc, utc_now
from tenantguard.shared.utils.generators import generate_cuid
from tenantguard.shared.utils.redaction import REDACTED, redact_sensitive

__all__ = [
    "REDACTED",
    "ensure_utc",
    "generate_cuid",
    "redact_sensitive",
    "utc_now",
]
