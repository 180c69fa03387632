import pytest

from wauth.backend.app import create_app
from wauth.core.application import TOTPApplication
from wauth.database.db_manager import SQLiteSecretStore

# ASCII "12345678901234567890" (RFC 4226 / RFC 6238 SHA-1 test key)
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture
def store(tmp_path):
    return SQLiteSecretStore(str(tmp_path / "wauth.db"), "totp_secrets")


@pytest.fixture
def application(store):
    return TOTPApplication(store)


@pytest.fixture
def client(application):
    app = create_app(application)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def frozen_time(monkeypatch):
    """Đặt time.time() về một giá trị cố định."""
    def freeze(value):
        monkeypatch.setattr("time.time", lambda: value)
    return freeze
