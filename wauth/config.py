"""
config.py — Đọc cấu hình cho wauth.

Hai chế độ:
- Development: WAUTH_DEV=true, hoặc (khi không đặt WAUTH_DEV) có pyproject.toml
  ở thư mục hiện tại / thư mục cha. Đọc biến môi trường, có thể từ file .env.
- Production: đọc ~/.config/wauth/config.toml
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os
import tomllib

from dotenv import find_dotenv, load_dotenv

from wauth.core.errors import ConfigError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
DEFAULT_TABLE_NAME = "totp_secrets"


@dataclass(frozen=True)
class Config:
    db_path: str
    table_name: str

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        if is_development_mode():
            # .env tìm từ thư mục hiện tại, giống cách xác định development mode
            load_dotenv(find_dotenv(usecwd=True))
            return cls(
                db_path=get_required_env_var("WAUTH_DB_PATH"),
                table_name=get_required_env_var("WAUTH_TABLE_NAME"),
            )

        path = config_path or get_config_path()
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"Failed to read config file at: {path}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse config file at: {path}: {e}") from e

        missing = [key for key in ("db_path", "table_name") if not data.get(key)]
        if missing:
            raise ConfigError(f"Missing {', '.join(missing)} in config file at: {path}")

        return cls(
            db_path=os.path.expanduser(str(data["db_path"])),
            table_name=str(data["table_name"]),
        )


def is_development_mode(start: Optional[Path] = None) -> bool:
    # WAUTH_DEV chỉ định rõ ràng thì luôn thắng
    dev_mode = os.getenv("WAUTH_DEV")
    if dev_mode is not None:
        return dev_mode.lower() == "true"

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / "pyproject.toml").exists():
            return True
    return False


def get_config_path() -> Path:
    return Path.home() / ".config" / "wauth" / "config.toml"


def get_required_env_var(key: str) -> str:
    value = os.getenv(key)
    if value is None:
        raise ConfigError(f"{key} must be set in environment variables or .env file")
    if not value.strip():
        raise ConfigError(f"{key} cannot be empty")
    return value


def server_address() -> tuple[str, int]:
    host = os.getenv("WAUTH_HOST", DEFAULT_HOST)
    port = os.getenv("WAUTH_PORT", str(DEFAULT_PORT))
    try:
        return host, int(port)
    except ValueError as e:
        raise ConfigError(f"WAUTH_PORT must be an integer, got {port!r}") from e
