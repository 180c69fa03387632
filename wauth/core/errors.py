"""
errors.py — Error taxonomy cho wauth.

Mỗi lỗi mang một `kind` cố định để caller (CLI, HTTP API) phân nhánh theo
loại lỗi thay vì so khớp message.
"""

from typing import Optional


class WauthError(Exception):
    """Base class cho mọi lỗi của wauth."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class InvalidSecret(WauthError, ValueError):
    """Secret không decode được từ Base32 (lúc sinh mã)."""

    kind = "invalid_secret"

    def __init__(self, message: str = "Invalid secret"):
        super().__init__(message)


class ValidationError(WauthError, ValueError):
    """Vi phạm một quy tắc validate; field là 'site_name' hoặc 'secret'."""

    kind = "validation_error"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        return f"Validation error for {self.field}: {self.message}"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["field"] = self.field
        return data


class DuplicateSiteName(WauthError):
    kind = "duplicate_site_name"

    def __init__(self, site_name: str):
        super().__init__(f"Site name '{site_name}' already exists")
        self.site_name = site_name

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["site_name"] = self.site_name
        return data


class NotFound(WauthError):
    kind = "not_found"

    def __init__(self, site_name: str):
        super().__init__(f"No secret found for site: {site_name}")
        self.site_name = site_name

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["site_name"] = self.site_name
        return data


class StoreError(WauthError):
    """
    Lỗi từ secret store (I/O, lock, schema...).

    Exception gốc được giữ ở `__cause__` (raise ... from e).
    """

    kind = "store_error"

    def __init__(self, message: str, site_name: Optional[str] = None):
        super().__init__(message)
        self.site_name = site_name

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.site_name is not None:
            data["site_name"] = self.site_name
        return data


class ConfigError(WauthError):
    kind = "config_error"


class InvalidTimestamp(WauthError, ValueError):
    """Timestamp ngoài khoảng counter 8-byte không dấu (trước epoch hoặc quá lớn)."""

    kind = "invalid_timestamp"

    def __init__(self, timestamp: int):
        super().__init__(f"Timestamp {timestamp} is outside the supported TOTP range")
        self.timestamp = timestamp

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["timestamp"] = self.timestamp
        return data
