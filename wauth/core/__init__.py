"""
wauth.core
==========

TOTP engine (RFC 6238) và validator cho secret / site name.

──────────────────────────────────────────────
Giải thuật cốt lõi
──────────────────────────────────────────────
- TOTP: HOTP với counter = floor(timestamp / 30)
  code = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^6
- Dynamic Truncation:
  Lấy 4 byte từ HMAC dựa vào offset (last byte & 0x0F), clear bit cao nhất.

──────────────────────────────────────────────
Ví dụ sử dụng nhanh
──────────────────────────────────────────────
>>> import time
>>> from wauth.core import validate_secret, totp
>>> validate_secret("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
>>> code, remaining = totp("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", 59)
>>> code, remaining
('287082', 1)
"""
from .errors import (
    DuplicateSiteName,
    InvalidSecret,
    InvalidTimestamp,
    NotFound,
    StoreError,
    ValidationError,
    WauthError,
)
from .otp_core import generate_code, remaining_seconds, totp
from .validators import is_valid_base32, validate_secret, validate_site_name
