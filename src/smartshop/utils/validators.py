"""
Local input checks run by the repository before any request is sent.

Each check raises ``smartshop.errors.ValidationError`` with a message that can
be shown to the user as is.
"""

import re

from smartshop.errors import ValidationError
from smartshop.models.social import MAX_RATING, MIN_RATING

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$")

# Common mail providers accepted at registration
EMAIL_DOMAIN_ALLOWLIST: tuple[str, ...] = (
    "gmail.com",
    "outlook.com",
    "hotmail.com",
    "yahoo.com",
    "163.com",
    "126.com",
    "qq.com",
    "foxmail.com",
    "sina.com",
    "sohu.com",
    "yeah.net",
    "139.com",
    "189.cn",
    "aliyun.com",
    "icloud.com",
)

VERIFICATION_ATTEMPTS_LIMIT = 3


def is_valid_email(email: str, allowlist: tuple[str, ...] = EMAIL_DOMAIN_ALLOWLIST) -> bool:
    if not email or not email.strip():
        return False
    if not EMAIL_PATTERN.match(email):
        return False
    domain = email.rsplit("@", 1)[1]
    return not allowlist or any(domain.lower() == d for d in allowlist)


def require_text(value: str, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} must not be empty")
    return value


def require_rating(rating: int) -> int:
    # bool is an int subclass; True is not a rating
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"rating must be an integer, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")
    return rating


def require_page(page: int, page_size: int) -> None:
    if page < 1:
        raise ValidationError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValidationError(f"page_size must be >= 1, got {page_size}")


def require_email(email: str) -> str:
    if not is_valid_email(email, allowlist=()):
        raise ValidationError(f"'{email}' is not a valid email address")
    return email
