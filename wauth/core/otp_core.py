"""
otp_core.py — Core TOTP engine cho wauth (RFC 6238 trên HOTP / RFC 4226).

Mục tiêu:
- Chỉ chứa hàm thuần (pure functions): không đọc đồng hồ hệ thống, không I/O.
- Thời gian hiện tại luôn được caller truyền vào (`timestamp`), CLI / API
  tự lấy int(time.time()) ở chỗ gọi.
- Cấu hình cố định: HMAC-SHA1, time step 30 giây, 6 chữ số.
"""

from typing import Tuple
import base64
import hashlib
import hmac
import struct

from .errors import InvalidSecret, InvalidTimestamp

# --- Config / constants ----------------------------------------------------
DIGITS = 6              # chuẩn: 6 chữ số
TIME_STEP = 30          # TOTP step (giây)
_MODULUS = 10 ** DIGITS
_MAX_STEP = 2 ** 64 - 1   # counter là 8-byte unsigned


# --- RFC helpers -----------------------------------------------------------
def decode_secret(secret_b32: str) -> bytes:
    """
    Base32-decode secret theo RFC 4648, không bắt buộc padding.

    - Padding '=' bị thiếu sẽ được bổ sung trước khi decode.
    - Không phân biệt hoa/thường (casefold).

    Raises:
        InvalidSecret: ký tự ngoài alphabet, độ dài không hợp lệ,
                       hoặc secret decode ra key rỗng.
    """
    stripped = secret_b32.rstrip("=")
    padded = stripped + "=" * (-len(stripped) % 8)
    try:
        key = base64.b32decode(padded, casefold=True)
    except ValueError as e:  # binascii.Error là subclass của ValueError
        raise InvalidSecret("Invalid secret") from e
    if not key:
        raise InvalidSecret("Invalid secret: decodes to an empty key")
    return key


def time_step(timestamp: int) -> int:
    """
    Counter TOTP = floor(timestamp / TIME_STEP).

    Raises:
        InvalidTimestamp: timestamp trước epoch (< 0) hoặc counter không
                          vừa 8 byte unsigned.
    """
    step = int(timestamp) // TIME_STEP
    if not 0 <= step <= _MAX_STEP:
        raise InvalidTimestamp(timestamp)
    return step


def int_to_bytes(i: int) -> bytes:
    """
    Chuyển counter sang 8-byte big-endian như RFC4226 yêu cầu.

    Ví dụ: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Áp dụng dynamic truncation theo RFC4226.

    - Lấy offset = last_byte & 0x0F (byte thứ 20 với SHA1)
    - Lấy 4 bytes từ offset, clear MSB (0x7F) cho byte đầu
    - Trả về integer 31-bit (unsigned)
    """
    offset = hmac_digest[-1] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )


# --- Public API ------------------------------------------------------------
def generate_code(secret_b32: str, timestamp: int) -> str:
    """
    Sinh mã TOTP 6 chữ số cho `timestamp` (epoch seconds).

    Steps:
    1. Base32-decode secret -> raw key bytes
    2. Message = 8-byte counter floor(timestamp / 30) (big-endian)
    3. HMAC-SHA1(key, message)
    4. Dynamic truncate -> dbc
    5. otp = dbc % 10^6, zero-pad thành đúng 6 chữ số

    Raises:
        InvalidSecret: nếu secret Base32 không hợp lệ. Không retry.
        InvalidTimestamp: nếu timestamp < 0 hoặc counter vượt quá 8 byte.
    """
    key = decode_secret(secret_b32)
    msg = int_to_bytes(time_step(timestamp))
    digest = hmac.new(key, msg, hashlib.sha1).digest()
    return str(dynamic_truncate(digest) % _MODULUS).zfill(DIGITS)


def remaining_seconds(timestamp: int) -> int:
    """
    Số giây còn lại trong time step hiện tại, luôn nằm trong [1, 30].

    Ở đúng ranh giới (timestamp % 30 == 0) trả về 30: một cửa sổ mới nguyên.
    """
    return TIME_STEP - (int(timestamp) % TIME_STEP)


def totp(secret_b32: str, timestamp: int) -> Tuple[str, int]:
    """
    Trả về (code, remaining_seconds) cho cùng một timestamp.
    """
    return generate_code(secret_b32, timestamp), remaining_seconds(timestamp)
