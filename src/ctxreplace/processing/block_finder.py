"""
block_finder – Locate open/close delimited blocks in a text.

Scanning is left to right and never nests: once an open delimiter is found
the next non-escaped close delimiter terminates the block, and scanning
resumes after it. An open delimiter with no close consumes the rest of the
text as an unterminated block and ends the scan.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from ctxreplace.core.errors import ConfigurationError
from ctxreplace.core.models import Block, Delimiter, FreeRange, MatchResult
from ctxreplace.logging.helpers import get_logger, trace_scan
from ctxreplace.processing.escape import is_escaped
from ctxreplace.processing.pattern_matcher import classify_delimiter, find

_log = get_logger('processing.blocks')

DelimiterArg = Union[str, Sequence[str]]


def _find_from(text: str, delimiter: Delimiter, offset: int) -> Optional[MatchResult]:
    if offset > len(text):
        return None
    return find(text, delimiter, offset)


def _step_past(m: MatchResult) -> int:
    # Zero-length regex matches must still move the scan forward.
    return m.end if m.end > m.start else m.start + 1


def find_blocks(text: str, open_delim: Delimiter, close_delim: Delimiter) -> List[Block]:
    """Scan *text* for blocks bounded by one open/close delimiter pair."""
    blocks: List[Block] = []
    offset = 0

    while True:
        open_m = _find_from(text, open_delim, offset)
        if open_m is None:
            break
        if is_escaped(text, open_m.start):
            trace_scan(_log, 'escaped open skipped', pos=open_m.start, value=open_m.value)
            offset = _step_past(open_m)
            continue

        search_from = open_m.end
        close_m = _find_from(text, close_delim, search_from)
        while close_m is not None and is_escaped(text, close_m.start):
            trace_scan(_log, 'escaped close skipped', pos=close_m.start, value=close_m.value)
            search_from = _step_past(close_m)
            close_m = _find_from(text, close_delim, search_from)

        if close_m is None:
            _log.debug('unterminated block opened at %d by %r', open_m.start, open_m.value)
            blocks.append(Block(open_m, None, len(text)))
            break

        trace_scan(_log, 'block found', start=open_m.start, end=close_m.end)
        blocks.append(Block(open_m, close_m, close_m.end))
        offset = max(close_m.end, open_m.start + 1)

    return blocks


def _as_list(value: DelimiterArg, side: str) -> List[str]:
    items = [value] if isinstance(value, str) else list(value)
    for item in items:
        if not isinstance(item, str):
            raise ConfigurationError(f'{side} delimiter must be a string, got {type(item).__name__}')
        if item == '':
            raise ConfigurationError('Delimiters cannot be empty.')
    return items


def normalize_pairs(open_delims: DelimiterArg, close_delims: DelimiterArg) -> List[Tuple[str, str]]:
    """Validate open/close arguments and pair them up.

    Raises:
        ConfigurationError: mismatched counts or an empty delimiter.
    """
    opens = _as_list(open_delims, 'open')
    closes = _as_list(close_delims, 'close')
    if len(opens) != len(closes):
        raise ConfigurationError(
            f'open and close delimiters must match in length ({len(opens)} != {len(closes)})'
        )
    return list(zip(opens, closes))


def find_all_blocks(text: str, open_delims: DelimiterArg, close_delims: DelimiterArg) -> List[Block]:
    """Run :func:`find_blocks` for every open/close pair and merge the results."""
    pairs = normalize_pairs(open_delims, close_delims)
    blocks: List[Block] = []
    for open_src, close_src in pairs:
        found = find_blocks(text, classify_delimiter(open_src), classify_delimiter(close_src))
        trace_scan(_log, 'pair scanned', open=open_src, close=close_src, blocks=len(found))
        blocks.extend(found)
    return blocks


def free_ranges(text: str, blocks: Sequence[Block]) -> List[FreeRange]:
    """Return the spans of *text* not covered by any block, in order."""
    ranges: List[FreeRange] = []
    current = 0
    for block in sorted(blocks, key=lambda b: b.start):
        if current < block.start:
            ranges.append(FreeRange(current, block.start))
        current = max(current, block.end)
    if current < len(text):
        ranges.append(FreeRange(current, len(text)))
    return ranges
