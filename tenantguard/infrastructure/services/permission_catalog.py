"""Permission catalog seed data and deployment-time seeding.

The catalog is not a runtime API: new (feature_area, action_type) pairs are
added here and applied with scripts/seed_permissions.py during deployment.
Seeding is idempotent and only inserts missing pairs.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.domain.enums import ActionType
from tenantguard.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)

logger = logging.getLogger(__name__)

_ALL_ACTIONS = tuple(ActionType.values())
_NO_EXPORT = ("view", "create", "edit", "delete")

# feature_area -> allowed action types
FEATURE_AREAS: dict[str, tuple[str, ...]] = {
    "clients": _ALL_ACTIONS,
    "contacts": _ALL_ACTIONS,
    "deals": _ALL_ACTIONS,
    "proposals": _ALL_ACTIONS,
    "contracts": _ALL_ACTIONS,
    "projects": _ALL_ACTIONS,
    "tasks": _ALL_ACTIONS,
    "invoices": _ALL_ACTIONS,
    "bills": _ALL_ACTIONS,
    "files": _ALL_ACTIONS,
    "messages": _ALL_ACTIONS,
    "threads": _ALL_ACTIONS,
    "organizations": _ALL_ACTIONS,
    "engagements": _ALL_ACTIONS,
    "vendors": _ALL_ACTIONS,
    "dashboard": ("view",),
    "settings": ("view", "edit"),
    "users": _NO_EXPORT,
    "roles": _NO_EXPORT,
}

_ACTION_VERBS = {
    "view": "View",
    "create": "Create",
    "edit": "Edit",
    "delete": "Delete",
    "export": "Export",
}


@dataclass(frozen=True)
class PermissionSeed:
    feature_area: str
    action_type: str
    description: str


def build_permission_seeds(
    feature_areas: dict[str, tuple[str, ...]] | None = None,
) -> list[PermissionSeed]:
    """Expand FEATURE_AREAS into one seed per pair."""
    seeds = []
    for area, actions in (feature_areas or FEATURE_AREAS).items():
        for action in actions:
            verb = _ACTION_VERBS.get(action, action.capitalize())
            seeds.append(PermissionSeed(area, action, f"{verb} {area}"))
    return seeds


PERMISSION_SEEDS: list[PermissionSeed] = build_permission_seeds()


def validate_permission_seeds(seeds: list[PermissionSeed]) -> list[str]:
    """Return a list of problems (empty when valid): duplicate pairs, bad action types, blank areas."""
    problems = []
    counts = Counter((s.feature_area, s.action_type) for s in seeds)
    for (area, action), count in sorted(counts.items()):
        if count > 1:
            problems.append(f"duplicate permission {area}:{action} ({count} entries)")
    valid_actions = set(ActionType.values())
    for seed in seeds:
        if not seed.feature_area.strip():
            problems.append("blank feature_area")
        if seed.action_type not in valid_actions:
            problems.append(
                f"invalid action_type '{seed.action_type}' for {seed.feature_area}"
            )
    return problems


async def seed_missing_permissions(
    db: AsyncSession, seeds: list[PermissionSeed] | None = None
) -> int:
    """Insert catalog pairs that are not present yet. Returns the number inserted.

    Raises ValueError if the seed list is invalid; nothing is written then.
    """
    seeds = PERMISSION_SEEDS if seeds is None else seeds
    problems = validate_permission_seeds(seeds)
    if problems:
        raise ValueError("Invalid permission seeds: " + "; ".join(problems))
    repo = PermissionRepository(db)
    existing = await repo.existing_pairs()
    inserted = 0
    for seed in seeds:
        if (seed.feature_area, seed.action_type) in existing:
            continue
        await repo.add(seed.feature_area, seed.action_type, seed.description)
        inserted += 1
    if inserted:
        logger.info("Seeded %d missing permission(s)", inserted)
    return inserted
