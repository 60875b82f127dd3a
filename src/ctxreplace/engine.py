from __future__ import annotations

"""Public entry points of the block replacement engine.

    replace            – rewrite every block with a template or callback.
    custom_replace     – hand the raw scan (free ranges + blocks) to a callback.
    scoped_replace_all – like replace, but only inside start/end sections.

All functions are pure: no state survives between calls.
"""

from typing import Any

from ctxreplace.constants import DEFAULT_TEMPLATE
from ctxreplace.core.errors import ConfigurationError
from ctxreplace.core.interfaces.text import CustomReplaceCallbackProtocol
from ctxreplace.core.models import PatternLike, as_replacement
from ctxreplace.logging.helpers import get_logger
from ctxreplace.processing.block_finder import DelimiterArg, find_all_blocks, free_ranges
from ctxreplace.processing.block_rewriter import rewrite
from ctxreplace.processing.scoped import scoped_replace_all

_log = get_logger('engine')


def replace(
    text: str,
    open_delims: DelimiterArg,
    close_delims: DelimiterArg,
    pattern: PatternLike = DEFAULT_TEMPLATE,
) -> str:
    """Replace every block delimited by *open_delims*/*close_delims*.

    Args:
        text: Original text.
        open_delims: Opening delimiter, or a list of them (literal or ``/regex/flags``).
        close_delims: Closing delimiter(s), paired by position with *open_delims*.
        pattern: ``'%s'``-style template receiving the inner text, or a
            callable ``(inner, block) -> str`` returning the full replacement.

    Returns:
        The rewritten text.

    Raises:
        ConfigurationError: mismatched delimiter lists, empty delimiter or
            invalid template.
    """
    replacement = as_replacement(pattern)
    blocks = find_all_blocks(text, open_delims, close_delims)
    _log.debug('replace: %d block(s) found', len(blocks))
    return rewrite(text, blocks, replacement)


def custom_replace(
    text: str,
    open_delims: DelimiterArg,
    close_delims: DelimiterArg,
    callback: CustomReplaceCallbackProtocol,
) -> Any:
    """Scan *text* and return ``callback(text, free_ranges, blocks)``.

    The callback is free to build any result (not necessarily text) from
    the blocks and the uncovered ranges between them.
    """
    if not callable(callback):
        raise ConfigurationError('custom_replace requires a callable')
    blocks = find_all_blocks(text, open_delims, close_delims)
    return callback(text, free_ranges(text, blocks), blocks)


__all__ = ['replace', 'custom_replace', 'scoped_replace_all']
