from __future__ import annotations

"""Nested contextual replacement driven by rule tables.

Each rule selects scope sections (``scope_start`` … ``scope_end``), and inside
every non-comment run of a section:

  • the rule's blocks are located first; each block's inner text then goes
    through the inner scopes in order and is wrapped by the rule pattern;
  • the rule's token replacements touch only the text between blocks.

Usage:
    >>> apply_contexts('<?php echo "hi {name}"; ?>', [{
    ...     'scope_start': '<?php', 'scope_end': '?>',
    ...     'self_replace': {'open': '"', 'close': '"', 'pattern': '"%s"'},
    ...     'inner_scopes': [{'self_replace': {'open': '{', 'close': '}', 'pattern': '{$%s}'}}],
    ... }])
    '<?php echo "hi {$name}"; ?>'
"""

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

from ctxreplace.core.models import Block, BlockReplace, Callback, ContextRule, InnerScope, as_replacement
from ctxreplace.engine import replace
from ctxreplace.logging.helpers import get_logger
from ctxreplace.processing.block_finder import find_all_blocks
from ctxreplace.processing.block_rewriter import rewrite
from ctxreplace.processing.scoped import scoped_transform
from ctxreplace.processing.token_ops import CompiledToken, TokenReplacer
from ctxreplace.rules.loader import coerce_rules

RuleLike = Union[ContextRule, Mapping[str, Any]]


class ContextualReplacer:
    """Apply a sequence of ContextRule objects to a text."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('contextual')
        self._tokens = TokenReplacer(logger=self._log)

    def apply(self, text: str, rules: Iterable[RuleLike]) -> str:
        for idx, rule in enumerate(coerce_rules(rules)):
            self._log.debug('rule %d: scope %r…%r', idx, rule.scope_start, rule.scope_end)
            text = self.apply_rule(text, rule)
        return text

    def apply_rule(self, text: str, rule: ContextRule) -> str:
        transform = self._body_transform(rule.block, rule.inner_scopes, self._compile(rule.tokens))
        return scoped_transform(text, rule.scope_start, rule.scope_end, transform)

    def _compile(self, tokens: Sequence[Any]) -> List[CompiledToken]:
        compiled = [self._tokens.compile_token(t) for t in tokens]
        return [fn for fn in compiled if fn is not None]

    def _inner_scope(self, inner: str, scope: InnerScope, compiled: Sequence[CompiledToken]) -> str:
        if scope.block is not None:
            inner = replace(inner, scope.block.open, scope.block.close, scope.block.pattern)
        if compiled:
            inner = self._tokens.apply(inner, compiled)
        return inner

    def _body_transform(
        self,
        block_rule: Optional[BlockReplace],
        inner_scopes: Sequence[InnerScope],
        tokens: Sequence[CompiledToken],
    ) -> Callable[[str], str]:
        free_transform = (lambda chunk: self._tokens.apply(chunk, tokens)) if tokens else None

        if block_rule is None:
            return free_transform or (lambda run: run)

        outer = as_replacement(block_rule.pattern)
        scopes = [(scope, self._compile(scope.tokens)) for scope in inner_scopes]

        def _render(inner: str, block: Block) -> str:
            for scope, compiled in scopes:
                inner = self._inner_scope(inner, scope, compiled)
            return outer.render(inner, block)

        def _run(run: str) -> str:
            blocks = find_all_blocks(run, block_rule.open, block_rule.close)
            return rewrite(run, blocks, Callback(_render), free_transform=free_transform)

        return _run


def apply_contexts(text: str, rules: Iterable[RuleLike]) -> str:
    """Apply nested contextual replacement *rules* to *text*, in order."""
    return ContextualReplacer().apply(text, rules)
