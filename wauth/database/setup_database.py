import os
import re
import sqlite3

from wauth.core.errors import ConfigError

_TABLE_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def check_table_name(table_name: str) -> str:
    """Tên bảng được ghép thẳng vào SQL nên chỉ chấp nhận identifier đơn giản."""
    if _TABLE_NAME_RE.fullmatch(table_name) is None:
        raise ConfigError(f"Invalid table name: {table_name!r}")
    return table_name


def setup_database(db_path: str, table_name: str) -> None:
    """Tạo bảng secrets nếu chưa có: một dòng cho mỗi site"""
    check_table_name(table_name)

    # Đảm bảo thư mục tồn tại
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        conn.execute(f'''
        CREATE TABLE IF NOT EXISTS {table_name} (
            site_name TEXT PRIMARY KEY,
            secret TEXT NOT NULL
        )
        ''')
        conn.commit()
    finally:
        conn.close()
