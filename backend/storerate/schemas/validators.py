from __future__ import annotations

import re

PASSWORD_MIN = 8
PASSWORD_MAX = 16
_PASSWORD_RE = re.compile(r'^(?=.*[A-Z])(?=.*[!@#$%^&*(),.?":{}|<>]).*$')


def strip_str(v):
    if isinstance(v, str):
        return v.strip()
    return v


def normalize_email(v: str) -> str:
    return v.strip().lower()


def check_password(v: str) -> str:
    if not (PASSWORD_MIN <= len(v) <= PASSWORD_MAX):
        raise ValueError(f"Password must be between {PASSWORD_MIN} and {PASSWORD_MAX} characters")
    if not _PASSWORD_RE.match(v):
        raise ValueError("Password must contain at least one uppercase letter and one special character")
    return v
