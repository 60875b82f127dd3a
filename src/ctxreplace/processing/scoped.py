"""
scoped – Confine rewriting to sections bounded by start/end markers.

Text outside sections is copied verbatim. Each section interior is split
around comments and only the non-comment runs are rewritten; the markers
themselves are re-emitted unchanged. A section whose end marker is missing
is closed by appending ``' ' + end_marker`` to the working text.
"""
from __future__ import annotations

from typing import List

from ctxreplace.constants import DEFAULT_TEMPLATE, SYNTHETIC_END_SEPARATOR
from ctxreplace.core.errors import ConfigurationError
from ctxreplace.core.interfaces.text import SegmentTransformProtocol
from ctxreplace.core.models import PatternLike, as_replacement
from ctxreplace.logging.helpers import get_logger
from ctxreplace.processing.block_finder import DelimiterArg, find_all_blocks, normalize_pairs
from ctxreplace.processing.block_rewriter import rewrite
from ctxreplace.processing.comment_splitter import replace_outside_comments

_log = get_logger('processing.scoped')


def _check_markers(section_start: str, section_end: str) -> None:
    if not section_start or not section_end:
        raise ConfigurationError('section markers cannot be empty')


def scoped_transform(
    text: str,
    section_start: str,
    section_end: str,
    transform: SegmentTransformProtocol,
) -> str:
    """Apply *transform* to the non-comment runs of every section of *text*."""
    _check_markers(section_start, section_end)

    out: List[str] = []
    offset = 0
    sections = 0

    while True:
        start = text.find(section_start, offset)
        if start < 0:
            out.append(text[offset:])
            break

        out.append(text[offset:start])
        interior_start = start + len(section_start)

        end = text.find(section_end, interior_start)
        if end < 0:
            _log.debug('section opened at %d has no %r, closing it at end of text', start, section_end)
            text = text + SYNTHETIC_END_SEPARATOR + section_end
            end = text.find(section_end, interior_start)

        interior = text[interior_start:end]
        out.append(section_start + replace_outside_comments(interior, transform) + section_end)
        sections += 1
        offset = end + len(section_end)

    _log.debug('%d section(s) processed for %r…%r', sections, section_start, section_end)
    return ''.join(out)


def scoped_replace_all(
    text: str,
    section_start: str,
    section_end: str,
    open_delims: DelimiterArg,
    close_delims: DelimiterArg,
    pattern: PatternLike = DEFAULT_TEMPLATE,
) -> str:
    """Rewrite blocks found inside sections only, skipping comments."""
    pairs = normalize_pairs(open_delims, close_delims)
    replacement = as_replacement(pattern)
    opens = [o for o, _ in pairs]
    closes = [c for _, c in pairs]

    def _rewrite_run(run: str) -> str:
        return rewrite(run, find_all_blocks(run, opens, closes), replacement)

    return scoped_transform(text, section_start, section_end, _rewrite_run)
