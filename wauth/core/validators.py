"""
validators.py — Kiểm tra site name và secret trước khi ghi vào store.

Các quy tắc được kiểm tra theo thứ tự cố định và dừng ở quy tắc đầu tiên
bị vi phạm, nên message trả cho user luôn ổn định.
"""

import re

from .errors import ValidationError

MAX_SITE_NAME_LENGTH = 100
MIN_SECRET_LENGTH = 16

_SITE_NAME_RE = re.compile(r"[a-zA-Z0-9\-._]+")
_BASE32_RE = re.compile(r"[A-Z2-7]+=*")


def is_valid_base32(value: str) -> bool:
    """Base32 strict: [A-Z2-7]+ rồi padding '=', tổng độ dài chia hết cho 8."""
    return _BASE32_RE.fullmatch(value) is not None and len(value) % 8 == 0


def validate_site_name(site_name: str) -> None:
    """
    Raises:
        ValidationError(field="site_name")
    """
    # rỗng
    if not site_name.strip():
        raise ValidationError("site_name", "Site name cannot be empty")

    # độ dài
    if len(site_name) > MAX_SITE_NAME_LENGTH:
        raise ValidationError(
            "site_name",
            f"Site name must be {MAX_SITE_NAME_LENGTH} characters or less",
        )

    # ký tự cho phép
    if _SITE_NAME_RE.fullmatch(site_name) is None:
        raise ValidationError(
            "site_name",
            "Site name can only contain alphanumeric characters, hyphens, dots, and underscores",
        )


def validate_secret(secret: str) -> None:
    """
    Raises:
        ValidationError(field="secret")
    """
    if not secret.strip():
        raise ValidationError("secret", "Secret cannot be empty")

    if not is_valid_base32(secret):
        raise ValidationError("secret", "Secret must be a valid Base32 string")

    # RFC 6238 khuyến nghị; chỉ là ngưỡng tối thiểu
    if len(secret) < MIN_SECRET_LENGTH:
        raise ValidationError(
            "secret",
            f"Secret should be at least {MIN_SECRET_LENGTH} characters long for security",
        )
