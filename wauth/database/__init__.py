from .db_manager import SecretStore, SQLiteSecretStore

__all__ = ["SecretStore", "SQLiteSecretStore"]
