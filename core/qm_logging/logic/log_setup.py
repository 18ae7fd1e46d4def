"""
core/qm_logging/logic/log_setup.py
==================================

Configures stdlib logging from the [Logging] config section.

Feature modules only ever call ``logging.getLogger(__name__)``; this module
is called once by the embedding application. Calling it again replaces the
handler it installed earlier instead of stacking a second one.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config.config_service import LoggingConfig, get_config_service

_HANDLER_NAME = "commentfeed"


def configure_logging(config: Optional[LoggingConfig] = None, *, stream=None) -> logging.Handler:
    """
    Install one stream handler on the root logger.

    Args:
        config: Logging section; defaults to the global ConfigService value.
        stream: Target stream (stderr if omitted).

    Returns:
        The installed handler.
    """
    cfg = config or get_config_service().logging
    level = logging.getLevelName(str(cfg.level).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level in [Logging] level: {cfg.level!r}")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(cfg.format))
    root.addHandler(handler)
    root.setLevel(level)
    return handler
