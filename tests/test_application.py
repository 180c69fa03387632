"""Tests for TOTPApplication: write path, read path, completion script."""

import pytest

from wauth.config import Config
from wauth.core.application import TOTPApplication, TotpCode
from wauth.core.errors import DuplicateSiteName, InvalidSecret, NotFound, ValidationError
from wauth.database.db_manager import SecretStore, SQLiteSecretStore

from .conftest import RFC_SECRET

SECRET = "JBSWY3DPEHPK3PXP"


class TestAddSecret:

    def test_add_then_list(self, application):
        application.add_secret("acme", SECRET)
        assert application.list_sites() == ["acme"]

    def test_duplicate_rejected_without_mutation(self, application, store):
        application.add_secret("acme", SECRET)
        with pytest.raises(DuplicateSiteName) as exc_info:
            application.add_secret("acme", RFC_SECRET)
        assert exc_info.value.site_name == "acme"
        assert store.get("acme") == SECRET

    def test_site_name_validated_before_secret(self, application, store):
        with pytest.raises(ValidationError) as exc_info:
            application.add_secret("bad name!", "short")
        assert exc_info.value.field == "site_name"
        assert store.list_site_names() == []

    def test_invalid_secret_not_stored(self, application, store):
        with pytest.raises(ValidationError) as exc_info:
            application.add_secret("acme", "ABCDEFGH")
        assert exc_info.value.field == "secret"
        assert not store.exists("acme")

    def test_validation_runs_before_uniqueness(self, application):
        application.add_secret("acme", SECRET)
        with pytest.raises(ValidationError):
            application.add_secret("acme", "short")


class _RacingStore(SecretStore):
    """exists() luôn trả False: mô phỏng hai writer cùng vượt qua kiểm tra."""

    def __init__(self):
        self.data = {}

    def put(self, site_name, secret):
        self.data[site_name] = secret

    def delete(self, site_name):
        self.data.pop(site_name, None)

    def get(self, site_name):
        return self.data.get(site_name)

    def list_site_names(self):
        return sorted(self.data)

    def exists(self, site_name):
        return False


def test_uniqueness_gate_is_check_then_write():
    # last write wins when both writers pass the existence check
    app = TOTPApplication(_RacingStore())
    app.add_secret("acme", SECRET)
    app.add_secret("acme", RFC_SECRET)
    assert app.store.get("acme") == RFC_SECRET


class TestDeleteSecret:

    def test_delete(self, application):
        application.add_secret("acme", SECRET)
        application.delete_secret("acme")
        assert application.list_sites() == []

    def test_delete_missing_is_noop(self, application):
        application.delete_secret("ghost")

    def test_site_can_be_re_added_after_delete(self, application, store):
        application.add_secret("acme", SECRET)
        application.delete_secret("acme")
        application.add_secret("acme", RFC_SECRET)
        assert store.get("acme") == RFC_SECRET


class TestGetCode:

    def test_rfc_vector(self, application):
        application.add_secret("rfc", RFC_SECRET)
        assert application.get_code("rfc", 59) == TotpCode("rfc", "287082", 1)

    def test_boundary_is_full_window(self, application):
        application.add_secret("rfc", RFC_SECRET)
        assert application.get_code("rfc", 60).remaining_seconds == 30

    def test_not_found(self, application):
        with pytest.raises(NotFound) as exc_info:
            application.get_code("ghost", 0)
        assert str(exc_info.value) == "No secret found for site: ghost"

    def test_stored_secret_not_revalidated_on_read(self, application, store):
        # lowercase, unpadded: rejected by the validator but decodable
        store.put("legacy", RFC_SECRET.lower())
        assert application.get_code("legacy", 59).code == "287082"

    def test_undecodable_stored_secret(self, application, store):
        store.put("broken", "!!!!!!!!")
        with pytest.raises(InvalidSecret):
            application.get_code("broken", 59)

    def test_to_dict(self):
        assert TotpCode("a", "000007", 12).to_dict() == {
            "site_name": "a",
            "code": "000007",
            "remaining_seconds": 12,
        }


def test_fish_completion_lists_sites(application):
    application.add_secret("github", SECRET)
    application.add_secret("aws", SECRET)
    script = application.generate_fish_completion()

    assert script.startswith("# Fish completion for wauth\n")
    assert '-a "add" -d "Add new TOTP secret for a site"' in script
    assert '-a "delete"' in script
    assert '-a "list"' in script
    assert '-a "show" -d "Show the current code for a site"' in script
    assert "__fish_seen_subcommand_from add delete list show generate-fish-completion" in script
    assert '-a "aws github" -d "Site name"' in script
    assert '-a "aws github" -d "Site to delete"' in script
    assert '-a "aws github" -d "Site to show"' in script
    assert 'complete -c wauth -l db -d "Path to the secret database" -r' in script
    assert "-f -c wauth -l db" not in script


def test_from_config(tmp_path):
    app = TOTPApplication.from_config(Config(str(tmp_path / "w.db"), "secrets"))
    assert isinstance(app.store, SQLiteSecretStore)
    assert app.store.table_name == "secrets"
