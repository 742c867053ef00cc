"""DTOs for the permission catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model."""

    id: str
    feature_area: str
    action_type: str
    description: str | None

    @property
    def code(self) -> str:
        """feature_area:action_type, e.g. clients:view."""
        return f"{self.feature_area}:{self.action_type}"
