"""
Logging for the impact-profile CLI.

Only the ``impact_profile`` logger tree is configured; the root logger is
left alone so embedding applications keep their own setup. Scoring and
history modules log per-user detail at DEBUG, which ``--verbose`` exposes.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "impact_profile"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    # quiet wins when both are set
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach handlers to the package logger, replacing any from an earlier call.

    Args:
        verbose: Show per-user scoring and history detail (DEBUG)
        quiet: Only report errors
        log_file: Also append records to this file, always at DEBUG

    Returns:
        The configured ``impact_profile`` logger
    """
    level = _level_for(verbose, quiet)
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stderr keeps --json output on stdout parseable
    console_handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        markup=False,
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file), mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if log_file else level)
    logger.propagate = False
    return logger
