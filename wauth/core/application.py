"""
application.py — Ghép TOTP engine, validator và secret store.

Write path: validate_site_name -> validate_secret -> kiểm tra trùng tên -> put.
Read path:  get -> generate_code (không validate lại secret khi đọc).

Lưu ý: kiểm tra trùng tên và lệnh ghi là hai thao tác riêng biệt, không có
transaction. Hai lệnh add đồng thời cho cùng một site có thể cùng vượt qua
kiểm tra; lệnh ghi sau sẽ thắng.
"""

from dataclasses import dataclass

from wauth.common.log_handler import log
from wauth.database.db_manager import SecretStore, SQLiteSecretStore
from .errors import DuplicateSiteName, NotFound
from .otp_core import generate_code, remaining_seconds
from .validators import validate_secret, validate_site_name

FISH_COMMANDS = (
    ("add", "Add new TOTP secret for a site"),
    ("delete", "Delete TOTP secret for a site"),
    ("list", "List all registered sites"),
    ("show", "Show the current code for a site"),
    ("generate-fish-completion", "Generate fish shell completion script"),
)


@dataclass(frozen=True)
class TotpCode:
    site_name: str
    code: str
    remaining_seconds: int

    def to_dict(self) -> dict:
        return {
            "site_name": self.site_name,
            "code": self.code,
            "remaining_seconds": self.remaining_seconds,
        }


class TOTPApplication:
    def __init__(self, store: SecretStore):
        self.store = store

    @classmethod
    def from_config(cls, config) -> "TOTPApplication":
        return cls(SQLiteSecretStore(config.db_path, config.table_name))

    def add_secret(self, site_name: str, secret: str) -> None:
        """
        Raises:
            ValidationError, DuplicateSiteName, StoreError
        """
        validate_site_name(site_name)
        validate_secret(secret)

        if self.store.exists(site_name):
            log.warning(f"Rejected duplicate site name '{site_name}'")
            raise DuplicateSiteName(site_name)

        self.store.put(site_name, secret)
        log.info(f"Added secret for site '{site_name}'")

    def delete_secret(self, site_name: str) -> None:
        # site không tồn tại -> no-op
        self.store.delete(site_name)
        log.info(f"Deleted secret for site '{site_name}'")

    def list_sites(self) -> list[str]:
        sites = self.store.list_site_names()
        log.debug(f"Retrieved {len(sites)} sites")
        return sites

    def get_code(self, site_name: str, timestamp: int) -> TotpCode:
        """
        Sinh mã cho site tại `timestamp` (caller cung cấp "now").

        Raises:
            NotFound, InvalidSecret, StoreError
        """
        secret = self.store.get(site_name)
        if secret is None:
            raise NotFound(site_name)

        code = generate_code(secret, timestamp)
        log.debug(f"Generated TOTP code for site '{site_name}'")
        return TotpCode(site_name, code, remaining_seconds(timestamp))

    def generate_fish_completion(self) -> str:
        sites = " ".join(self.list_sites())
        commands = " ".join(command for command, _ in FISH_COMMANDS)
        lines = ["# Fish completion for wauth"]
        # subcommands
        for command, description in FISH_COMMANDS:
            lines.append(
                f'complete -f -c wauth -n "__fish_use_subcommand" -a "{command}" -d "{description}"'
            )
        # site names
        lines.append(
            f'complete -f -c wauth -n "not __fish_seen_subcommand_from {commands}" '
            f'-a "{sites}" -d "Site name"'
        )
        lines.append(
            f'complete -f -c wauth -n "__fish_seen_subcommand_from delete" '
            f'-a "{sites}" -d "Site to delete"'
        )
        lines.append(
            f'complete -f -c wauth -n "__fish_seen_subcommand_from show" '
            f'-a "{sites}" -d "Site to show"'
        )
        # options; --db nhận đường dẫn nên giữ file completion
        lines.append('complete -c wauth -l db -d "Path to the secret database" -r')
        lines.append('complete -f -c wauth -l verbose -d "Enable debug logging"')
        return "\n".join(lines) + "\n"
