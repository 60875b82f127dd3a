"""
block_rewriter – Replace block spans with rendered replacements.

Blocks are visited by start position, last first, and the output is
assembled in a fresh buffer from the untouched original text, so offsets
computed by the scan stay valid for every block still to be processed.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from ctxreplace.core.models import Block, ReplacementPattern
from ctxreplace.logging.helpers import get_logger

_log = get_logger('processing.rewrite')


def rewrite(
    text: str,
    blocks: Sequence[Block],
    pattern: ReplacementPattern,
    *,
    free_transform: Optional[Callable[[str], str]] = None,
) -> str:
    """Return *text* with every block span replaced by ``pattern.render``.

    Args:
        text: Text the blocks were found in.
        blocks: Blocks from one or more delimiter pairs.
        pattern: Template or Callback variant.
        free_transform: Optional rewrite applied to the text between blocks.

    A block that overlaps one already rewritten (possible only with several
    delimiter pairs) is left out; the later-starting block wins.
    """
    pieces: List[str] = []
    cursor = len(text)

    def _emit_free(chunk: str) -> None:
        if chunk and free_transform is not None:
            chunk = free_transform(chunk)
        pieces.append(chunk)

    for block in sorted(blocks, key=lambda b: b.start, reverse=True):
        if block.end > cursor:
            _log.debug('block at %d overlaps a rewritten block, skipped', block.start)
            continue
        _emit_free(text[block.end:cursor])
        pieces.append(pattern.render(block.inner(text), block))
        cursor = block.start

    _emit_free(text[:cursor])
    return ''.join(reversed(pieces))
