"""Demo-mode session context.

Demo mode fabricates a profile per role instead of going through the identity
provider. The active profile lives in a small JSON file owned by an explicit
DemoSessionStore; callers pass the store to whatever needs the profile.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..models.enums import UserRole
from ..models.user_profile import UserProfile

logger = logging.getLogger(__name__)

__all__ = [
    "DEMO_PROFILES",
    "DemoSessionStore",
    "SessionError",
]

DEMO_PROFILES: dict[UserRole, UserProfile] = {
    UserRole.EMPLOYEE: UserProfile(name="Demo Employee", app_role=UserRole.EMPLOYEE),
    UserRole.PM: UserProfile(name="Demo Manager", app_role=UserRole.PM),
    UserRole.DELIVERY_HEAD: UserProfile(name="Demo Delivery Head", app_role=UserRole.DELIVERY_HEAD),
    UserRole.PMO: UserProfile(name="Demo PMO", app_role=UserRole.PMO),
    UserRole.ADMIN: UserProfile(name="Demo Admin", app_role=UserRole.ADMIN),
    UserRole.MANAGEMENT: UserProfile(name="Demo Management", app_role=UserRole.MANAGEMENT),
}


class SessionError(Exception):
    """Stored session exists but cannot be read."""


class DemoSessionStore:
    """Load / save / clear lifecycle for the demo profile."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._profile: UserProfile | None = None

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    @property
    def is_demo_mode(self) -> bool:
        return self._profile is not None

    def load(self, strict: bool = False) -> UserProfile | None:
        """Read the stored profile.

        A missing file means no session. A corrupt file is treated as no
        session unless ``strict`` is set, in which case SessionError is raised.
        """
        if not self.path.exists():
            self._profile = None
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self._profile = UserProfile.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            self._profile = None
            if strict:
                raise SessionError(f"unreadable demo session {self.path}: {e}") from e
            logger.warning(f"ignoring unreadable demo session {self.path}: {e}")
        return self._profile

    def save(self, profile: UserProfile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(profile.to_dict()), encoding="utf-8")
        self._profile = profile

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        self._profile = None

    def login_as_demo(self, role: UserRole) -> UserProfile:
        profile = DEMO_PROFILES[role]
        self.save(profile)
        logger.info(f"demo login: {profile.name} ({role.value})")
        return profile

    def logout(self) -> None:
        self.clear()
        logger.info("demo logout")
