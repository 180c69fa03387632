"""wauth — TOTP codes for named sites, secrets kept in a secret store."""

__version__ = "0.1.0"
