"""Input validators: password strength and email format."""
import re
from typing import List, NamedTuple

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
MIN_PASSWORD_LENGTH = 6

_SPECIAL_RE = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

STRENGTH_LABELS = {
    0: "",
    1: "Weak",
    2: "Fair",
    3: "Good",
    4: "Strong",
    5: "Very Strong",
}


class Requirement(NamedTuple):
    label: str
    met: bool


class PasswordStrength(NamedTuple):
    level: int
    label: str


def password_requirements(password: str) -> List[Requirement]:
    """Checklist shown next to a new-password field."""
    return [
        Requirement(f"At least {MIN_PASSWORD_LENGTH} characters", len(password) >= MIN_PASSWORD_LENGTH),
        Requirement("Contains a number", re.search(r"\d", password) is not None),
        Requirement("Contains uppercase letter", re.search(r"[A-Z]", password) is not None),
        Requirement("Contains lowercase letter", re.search(r"[a-z]", password) is not None),
        Requirement("Contains special character (!@#$%^&*)", _SPECIAL_RE.search(password) is not None),
    ]


def password_strength(password: str) -> PasswordStrength:
    """
    Rate a password from 0 (empty) to 5 (Very Strong).

    A non-empty password scores at least 1, otherwise the number of
    requirements it meets.

    Args:
        password: Candidate password

    Returns:
        PasswordStrength(level, label)
    """
    if not password:
        return PasswordStrength(0, STRENGTH_LABELS[0])

    met = sum(1 for r in password_requirements(password) if r.met)
    level = max(1, met)
    return PasswordStrength(level, STRENGTH_LABELS[level])


def is_valid_email(email: str) -> bool:
    """Loose format check: something@something.tld, no whitespace."""
    return bool(email) and _EMAIL_RE.match(email.strip()) is not None
