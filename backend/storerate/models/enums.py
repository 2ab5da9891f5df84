from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    """Platform-wide role. Assigned at creation and never changed."""
    system_admin = "SYSTEM_ADMIN"
    normal_user = "NORMAL_USER"
    store_owner = "STORE_OWNER"

    @classmethod
    def values(cls) -> list[str]:
        return [e.value for e in cls]


ROLE_PATTERN = r"^(SYSTEM_ADMIN|NORMAL_USER|STORE_OWNER)$"
SORT_BY_PATTERN = r"^(name|email|createdAt)$"
SORT_ORDER_PATTERN = r"^(asc|desc)$"
