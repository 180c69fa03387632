"""
db_manager.py — Secret store cho wauth.

Bản ghi lưu cho mỗi site: { site_name (primary key), secret (Base32) }.
Store không validate gì; validate và kiểm tra trùng tên nằm ở application.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional
import sqlite3

from wauth.common.log_handler import log
from wauth.core.errors import StoreError
from .setup_database import check_table_name, setup_database


class SecretStore(ABC):
    """Interface key-value: site_name -> secret."""

    @abstractmethod
    def put(self, site_name: str, secret: str) -> None:
        """Ghi (hoặc ghi đè) secret cho site."""

    @abstractmethod
    def delete(self, site_name: str) -> None:
        """Xóa site; không lỗi nếu site không tồn tại."""

    @abstractmethod
    def get(self, site_name: str) -> Optional[str]:
        """Trả về secret hoặc None."""

    @abstractmethod
    def list_site_names(self) -> list[str]:
        ...

    @abstractmethod
    def exists(self, site_name: str) -> bool:
        """Đọc strongly-consistent, dùng cho kiểm tra trùng tên."""


class SQLiteSecretStore(SecretStore):
    def __init__(self, db_path: str, table_name: str = "totp_secrets"):
        self.db_path = db_path
        self.table_name = check_table_name(table_name)
        self._initialized = False

    @contextmanager
    def _connection(self, action: str, site_name: Optional[str] = None) -> Iterator[sqlite3.Connection]:
        """Kết nối đến database; mọi sqlite3.Error được bọc thành StoreError."""
        try:
            if not self._initialized:
                setup_database(self.db_path, self.table_name)
                self._initialized = True
            conn = sqlite3.connect(self.db_path)
        except (sqlite3.Error, OSError) as e:
            log.error(f"Failed to open secret store at {self.db_path}: {e}")
            raise StoreError(f"Failed to {action}: {e}", site_name=site_name) from e

        conn.row_factory = sqlite3.Row  # Trả về kết quả dạng dictionary
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            log.error(f"Secret store error while trying to {action}: {e}")
            raise StoreError(f"Failed to {action}: {e}", site_name=site_name) from e
        finally:
            conn.close()

    def put(self, site_name: str, secret: str) -> None:
        with self._connection("save TOTP secret", site_name) as conn:
            # last-write-wins, giống put_item của một key-value store
            conn.execute(
                f"INSERT OR REPLACE INTO {self.table_name} (site_name, secret) VALUES (?, ?)",
                (site_name, secret),
            )

    def delete(self, site_name: str) -> None:
        with self._connection("delete TOTP secret", site_name) as conn:
            conn.execute(f"DELETE FROM {self.table_name} WHERE site_name = ?", (site_name,))

    def get(self, site_name: str) -> Optional[str]:
        with self._connection("get TOTP secret", site_name) as conn:
            row = conn.execute(
                f"SELECT secret FROM {self.table_name} WHERE site_name = ?", (site_name,)
            ).fetchone()
        return row["secret"] if row else None

    def list_site_names(self) -> list[str]:
        with self._connection("list sites") as conn:
            rows = conn.execute(
                f"SELECT site_name FROM {self.table_name} ORDER BY site_name"
            ).fetchall()
        return [row["site_name"] for row in rows]

    def exists(self, site_name: str) -> bool:
        with self._connection("check site name uniqueness", site_name) as conn:
            row = conn.execute(
                f"SELECT 1 FROM {self.table_name} WHERE site_name = ?", (site_name,)
            ).fetchone()
        return row is not None
