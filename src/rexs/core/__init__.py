"""REXS Core -- cross-cutting primitives shared by every other layer.

Architecture::

    errors.py      Structured error hierarchy (RexsError + categories)
    logging.py     Structured logging (structlog)
    settings.py    RexsSettings (pydantic-settings, REXS_* env vars)
    keys.py        RexsKey base of the open enumerations

Tags:
    rexs-core, foundation, errors, logging, settings

Doc-Types:
    package-overview, module-index
"""

from rexs.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    ModelAccessError,
    ResourceLoadError,
    RexsError,
    UnitMismatchError,
    UpgradeError,
    ValueAccessError,
    categorize_error,
)
from rexs.core.keys import RexsKey
from rexs.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from rexs.core.settings import RexsSettings, clear_settings_cache, get_settings

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "RexsError",
    "ValueAccessError",
    "UnitMismatchError",
    "ModelAccessError",
    "UpgradeError",
    "ResourceLoadError",
    "ConfigError",
    "categorize_error",
    # Keys
    "RexsKey",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
    # Settings
    "RexsSettings",
    "get_settings",
    "clear_settings_cache",
]
