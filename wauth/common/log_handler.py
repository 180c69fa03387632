import logging
import sys


def _build_logger():
    logger = logging.getLogger("wauth")

    # Prevent creation of handlers more than once
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s "
        "%(message)s  (in %(filename)s:%(lineno)d)"
    )

    # stderr so log lines never mix with command output on stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger


log = _build_logger()


def set_verbose(verbose: bool) -> None:
    # CLI: mặc định chỉ hiện warning trở lên, --verbose bật debug
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)
