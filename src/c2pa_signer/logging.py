"""Structured logging setup for the signing server."""
from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping, TextIO

import structlog

_DEFAULT_LEVEL = "info"
_REDACTED = "[redacted]"
# Context keys that may carry bearer tokens or key material.
_SENSITIVE_KEYS = frozenset(
    {"authorization", "token", "private_key", "privatekey", "secret", "secret_string", "claim"}
)


def configure_logging(level: str | None = None, *, stream: TextIO | None = None) -> None:
    """Configure structlog to emit one JSON object per line on ``stream`` (stdout by default).

    Every record carries ``ts``, ``level``, ``msg`` and ``component``. Values
    bound under sensitive keys (tokens, private keys, raw claims) are replaced
    before rendering so they never reach the log sink. Lambda forwards stdout
    to CloudWatch as-is, so no other handler is installed.
    """

    numeric_level = logging.getLevelName((level or _DEFAULT_LEVEL).upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            _component_processor,
            _redact_sensitive,
            _rename_event_to_msg,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def _component_processor(
    logger: Any, _name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    if event_dict.get("component") is None:
        event_dict["component"] = getattr(logger, "name", None) or "c2pa_signer"
    return event_dict


def _redact_sensitive(
    _logger: Any, _name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key in list(event_dict):
        if key.lower() in _SENSITIVE_KEYS:
            event_dict[key] = _REDACTED
    return event_dict


def _rename_event_to_msg(
    _logger: Any, _name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    if "msg" not in event_dict:
        event_dict["msg"] = event_dict.pop("event", "")
    return event_dict


__all__ = ["configure_logging"]
