from __future__ import annotations
"""Callable protocols accepted by the replacement engine."""

from typing import Any, Protocol, Sequence

from ctxreplace.core.models import Block, FreeRange


class BlockCallbackProtocol(Protocol):
    """Compute the replacement of a whole block span.

    Receives the inner text and the Block it was taken from; the result
    replaces the block including its delimiters.
    """

    def __call__(self, inner: str, block: Block) -> str:
        ...


class CustomReplaceCallbackProtocol(Protocol):
    """Build an arbitrary result from the raw scan data."""

    def __call__(self, text: str, free_ranges: Sequence[FreeRange], blocks: Sequence[Block]) -> Any:
        ...


class SegmentTransformProtocol(Protocol):
    """Rewrite one non-comment run of an in-scope section."""

    def __call__(self, segment: str) -> str:
        ...
