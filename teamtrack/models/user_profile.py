from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .enums import UserRole

"""UserProfile model (name + application role)."""

__all__ = [
    "UserProfile",
]


@dataclass(frozen=True)
class UserProfile:
    name: str
    app_role: UserRole

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "appRole": self.app_role.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfile:
        return cls(name=str(data["name"]), app_role=UserRole(data["appRole"]))
