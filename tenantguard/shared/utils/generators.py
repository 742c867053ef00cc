"""Primary-key generation."""

from cuid2 import cuid_wrapper

_next_id = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2. Every persisted row (tenants, roles, audit records) uses one."""
    return str(_next_id())
