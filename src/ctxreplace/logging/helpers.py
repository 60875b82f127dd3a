from __future__ import annotations

"""Logger setup for ctxreplace and the opt-in block-scan trace.

Every module logs through ``get_logger('<area>')``, which yields a child of
the single ``ctxreplace`` logger. The CLI configures that base logger once
(plain ``LEVEL: message`` lines or one JSON object per line) and all
children inherit it.

Block scanning is the only hot loop; it reports each skipped escape and
each found block through :func:`trace_scan`, which stays silent unless
``CTXREPLACE_TRACE_SCAN=1`` so normal runs pay nothing for it.
"""

import logging
import os
from typing import Optional, TextIO

from ctxreplace.constants import ENV_TRACE_SCAN, ENV_VERSION

BASE_LOGGER = 'ctxreplace'
_PLAIN_FORMAT = '%(levelname)s: %(message)s'


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record.

    Keys are ``ts`` (UTC, milliseconds), ``level``, ``module`` (the logger
    name, e.g. ``ctxreplace.processing.blocks``), ``msg``, ``version`` and,
    for scan traces, ``ctx`` with the offsets and delimiter values.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        # imported lazily: ctxreplace/__init__ imports modules that import us
        try:
            from ctxreplace import __version__ as _v
            return str(_v)
        except ImportError:
            return os.getenv(ENV_VERSION, 'unknown')

    def format(self, record: logging.LogRecord) -> str:
        from datetime import datetime, timezone
        import json

        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            'ts': ts.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'module': record.name,
            'msg': record.getMessage(),
            'version': self._version,
        }

        ctx = getattr(record, 'context', None)
        if isinstance(ctx, dict) and ctx:
            payload['ctx'] = ctx

        return json.dumps(payload, ensure_ascii=False)


def _formatter(json_logs: bool) -> logging.Formatter:
    return JsonLogFormatter() if json_logs else logging.Formatter(_PLAIN_FORMAT)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Attach the ctxreplace stderr handler, or reconfigure it in place.

    A second call with another mode switches the formatter and level of the
    existing handler instead of stacking a new one, so repeated CLI runs in
    one process never duplicate output.
    """
    base = logging.getLogger(BASE_LOGGER)
    base.setLevel(level)

    for handler in base.handlers:
        if getattr(handler, '_ctxreplace_owned', False):
            handler.setFormatter(_formatter(json_logs))
            return base

    import sys as _sys

    base.propagate = False
    handler = logging.StreamHandler(stream or _sys.stderr)
    handler.setFormatter(_formatter(json_logs))
    handler._ctxreplace_owned = True
    base.addHandler(handler)
    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``ctxreplace`` or its child ``ctxreplace.<name>``."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{BASE_LOGGER}.{name}')


def is_trace_scan_enabled() -> bool:
    return os.getenv(ENV_TRACE_SCAN) == '1'


def trace_scan(logger: logging.Logger, event: str, **ctx) -> None:
    """Log one block-scan event at DEBUG when scan tracing is on.

    Args:
        logger: Logger of the scanning module.
        event: Short event name such as ``'block found'``.
        **ctx: Positions and delimiter values; copied to the record's
            ``context`` so the JSON formatter emits them under ``ctx``.
    """
    if not is_trace_scan_enabled():
        return
    ctx.setdefault('kind', 'scan')
    logger.debug('%s | %s', event, ' '.join(f'{k}={v!r}' for k, v in ctx.items()),
                 extra={'context': ctx})
