"""
comment_splitter – Split text into alternating code/comment segments.

Recognised comments are ``/* … */`` (shortest match, may span lines) and
``// …`` up to the end of the line. Detection is lexical: markers inside
string literals are treated as comments too.
"""
from __future__ import annotations

from typing import Callable, List

from ctxreplace.constants import COMMENT_SPLIT_RE
from ctxreplace.core.models import Segment


def split_outside_comments(text: str) -> List[Segment]:
    """Return segments covering *text*; even positions are non-comment runs."""
    parts = COMMENT_SPLIT_RE.split(text)
    return [Segment(part, is_comment=bool(i % 2)) for i, part in enumerate(parts)]


def replace_outside_comments(text: str, transform: Callable[[str], str]) -> str:
    """Apply *transform* to the non-comment runs of *text* only."""
    return ''.join(
        seg.content if seg.is_comment else transform(seg.content)
        for seg in split_outside_comments(text)
    )
