from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Tuple, Union

from ctxreplace.constants import DEFAULT_TEMPLATE
from ctxreplace.core.errors import ConfigurationError

if TYPE_CHECKING:
    from ctxreplace.core.interfaces.text import BlockCallbackProtocol

_DIRECTIVE_RX = re.compile(r'%(.?)', re.S)


@dataclass(frozen=True)
class LiteralDelimiter:
    """Delimiter matched as an exact substring."""
    source: str


@dataclass(frozen=True)
class PatternDelimiter:
    """Regex-shaped delimiter (``/body/flags``) compiled once.

    ``regex`` is None when the body does not compile; such a delimiter
    matches nothing.
    """
    source: str
    regex: Optional[re.Pattern[str]] = field(default=None, compare=False)
    anchored: bool = False

    @property
    def is_malformed(self) -> bool:
        return self.regex is None


Delimiter = Union[LiteralDelimiter, PatternDelimiter]


@dataclass(frozen=True)
class GroupCapture:
    value: Optional[str]
    start: Optional[int]
    end: Optional[int]
    length: int = 0


@dataclass(frozen=True)
class MatchResult:
    start: int
    end: int
    value: str
    groups: Mapping[str, GroupCapture] = field(default_factory=dict)

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Block:
    """A matched open/close pair, or an open with no close.

    ``end`` is the exclusive end of the span: ``close.end`` for closed
    blocks, end of the scanned text for unterminated ones.
    """
    open: MatchResult
    close: Optional[MatchResult]
    end: int

    @property
    def start(self) -> int:
        return self.open.start

    @property
    def is_terminated(self) -> bool:
        return self.close is not None

    @property
    def inner_start(self) -> int:
        return self.open.end

    @property
    def inner_end(self) -> int:
        return self.close.start if self.close is not None else self.end

    def inner(self, text: str) -> str:
        return text[self.inner_start:self.inner_end]


@dataclass(frozen=True)
class FreeRange:
    start: int
    end: int


@dataclass(frozen=True)
class Segment:
    content: str
    is_comment: bool = False


@dataclass(frozen=True)
class Template:
    """printf-style template with a single ``%s`` placeholder."""
    text: str

    def __post_init__(self) -> None:
        directives = _DIRECTIVE_RX.findall(self.text)
        placeholders = sum(1 for d in directives if d == 's')
        unsupported = [d for d in directives if d not in ('s', '%')]
        if unsupported:
            raise ConfigurationError(
                f'unsupported directive %{unsupported[0]} in template {self.text!r}'
            )
        if placeholders != 1:
            raise ConfigurationError(
                f'template {self.text!r} must contain exactly one %s placeholder, '
                f'found {placeholders}'
            )

    def render(self, inner: str, block: Block) -> str:
        return self.text % (inner,)


@dataclass(frozen=True)
class Callback:
    """Replacement computed by ``func(inner, block)`` for the whole span."""
    func: BlockCallbackProtocol

    def render(self, inner: str, block: Block) -> str:
        replacement = self.func(inner, block)
        if not isinstance(replacement, str):
            raise TypeError(
                f'replacement callback returned {type(replacement).__name__}, expected str'
            )
        return replacement


ReplacementPattern = Union[Template, Callback]
PatternLike = Union[ReplacementPattern, str, Callable[[str, Block], str], None]


def as_replacement(pattern: Any) -> ReplacementPattern:
    """Coerce a caller-supplied pattern into a ReplacementPattern variant."""
    if isinstance(pattern, (Template, Callback)):
        return pattern
    if pattern is None:
        return Template(DEFAULT_TEMPLATE)
    if isinstance(pattern, str):
        return Template(pattern)
    if callable(pattern):
        return Callback(pattern)
    raise ConfigurationError(
        f'pattern must be a template string or a callable, got {type(pattern).__name__}'
    )


# --------------------------------------------------------------------------- #
#  Rules                                                                      #
# --------------------------------------------------------------------------- #
@dataclass(frozen=True)
class TokenReplace:
    """Plain search/replace; ``search`` may be literal or regex-shaped."""
    search: str
    replace: str = ''


@dataclass(frozen=True)
class BlockReplace:
    open: Tuple[str, ...]
    close: Tuple[str, ...]
    pattern: PatternLike = DEFAULT_TEMPLATE


@dataclass(frozen=True)
class InnerScope:
    block: Optional[BlockReplace] = None
    tokens: Tuple[TokenReplace, ...] = ()


@dataclass(frozen=True)
class ContextRule:
    scope_start: str
    scope_end: str
    block: Optional[BlockReplace] = None
    inner_scopes: Tuple[InnerScope, ...] = ()
    tokens: Tuple[TokenReplace, ...] = ()
