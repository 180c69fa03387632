#!/usr/bin/env python3
"""
otp_cli.py — CLI cho wauth

Cung cấp các subcommand:
- add <site> <secret>        : lưu secret cho site
- delete <site>              : xóa secret của site
- list                       : liệt kê các site
- generate-fish-completion   : in script completion cho fish shell
- <site>                     : hiển thị mã TOTP hiện tại của site

eg..:
    wauth add github JBSWY3DPEHPK3PXPJBSWY3DP
    wauth github
    wauth --db /tmp/wauth.db list
    wauth -- -foo                 (site name bắt đầu bằng "-")
"""

import argparse
import sys
import time

from wauth.common.log_handler import set_verbose
from wauth.config import DEFAULT_TABLE_NAME, Config
from .application import TOTPApplication
from .errors import NotFound, WauthError

COMMANDS = ("add", "delete", "list", "generate-fish-completion", "show")


# --- CLI command handlers ---
def cmd_add(app, args):
    app.add_secret(args.site_name, args.secret)
    print(f"Added secret for {args.site_name}")


def cmd_delete(app, args):
    app.delete_secret(args.site_name)
    print(f"Deleted secret for {args.site_name}")


def cmd_list(app, args):
    print("Registered sites:")
    for site in app.list_sites():
        print(f"- {site}")


def cmd_fish(app, args):
    print(app.generate_fish_completion(), end="")


def cmd_show(app, args):
    try:
        result = app.get_code(args.site_name, int(time.time()))
    except NotFound:
        print(f"No secret found for site: {args.site_name}")
        return

    print(f"WAUTH - TOTP Generator for {args.site_name}")
    print("---------------------")
    print(f"Code: {result.code} ({result.remaining_seconds}s remaining)")


def cmd_help(app, args):
    print("Please provide a site name or use --help for available commands")


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="wauth",
        description="TOTP code generator backed by a secret store",
        epilog=(
            "Run 'wauth <site>' to show the current code for a site. "
            "For site names starting with '-' use 'wauth -- <site>' "
            "or 'wauth delete -- <site>'."
        ),
    )
    p.add_argument("--db", help="Path to the secret database (skips config loading)")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    pa = sub.add_parser("add", help="Add a new TOTP secret")
    pa.add_argument("site_name", help="Site name (e.g., github, google)")
    pa.add_argument("secret", help="Base32 secret key")
    pa.set_defaults(func=cmd_add)

    pd = sub.add_parser("delete", help="Delete a TOTP secret")
    pd.add_argument("site_name", help="Site name to delete")
    pd.set_defaults(func=cmd_delete)

    pl = sub.add_parser("list", help="List all registered sites")
    pl.set_defaults(func=cmd_list)

    pf = sub.add_parser("generate-fish-completion", help="Generate fish shell completion script")
    pf.set_defaults(func=cmd_fish)

    # 'wauth <site>' được viết lại thành 'wauth show <site>' trong main()
    ps = sub.add_parser("show", help="Show the current code for a site")
    ps.add_argument("site_name", help="Site name to generate code for")
    ps.set_defaults(func=cmd_show)

    return p


def _normalize_argv(argv: list) -> list:
    """
    Chèn 'show' trước tham số positional đầu tiên nếu nó không phải subcommand.

    '--' kết thúc phần option: tham số sau nó luôn là site name, kể cả khi
    bắt đầu bằng '-' (eg.. wauth -- -foo).
    """
    argv = list(argv)
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            argv.insert(i, "show")
            break
        if arg == "--db":
            i += 2
            continue
        if arg.startswith("-"):
            i += 1
            continue
        if arg not in COMMANDS:
            argv.insert(i, "show")
        break
    return argv


def build_application(args) -> TOTPApplication:
    if args.db:
        config = Config(db_path=args.db, table_name=DEFAULT_TABLE_NAME)
    else:
        config = Config.load()
    return TOTPApplication.from_config(config)


def main(argv=None, application=None) -> int:
    parser = build_parser()
    args = parser.parse_args(_normalize_argv(sys.argv[1:] if argv is None else argv))
    set_verbose(args.verbose)

    if args.func is cmd_help:
        cmd_help(None, args)
        return 0

    try:
        app = application or build_application(args)
        args.func(app, args)
    except WauthError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
