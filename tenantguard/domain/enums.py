"""Domain enumerations for the permission model."""

from enum import Enum

from tenantguard.shared.enums import _ValuesMixin


class ActionType(_ValuesMixin, str, Enum):
    """Fixed action vocabulary applied to every feature area."""

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    EXPORT = "export"
