from __future__ import annotations

"""Rule table loader.

Turns JSON-like rule documents into immutable ContextRule objects:

    [
      {
        "scope_start": "<?php",
        "scope_end": "?>",
        "self_replace": {"open": "\\"", "close": "\\"", "pattern": "\\".(%s).\\""},
        "inner_scopes": [
          {"self_replace": {"open": "{", "close": "}", "pattern": "<%s>"}},
          {"token_replace": {"search": "/\\\\$(\\\\w+)/", "replace": "$1"}}
        ],
        "token_replace": [{"search": "array(", "replace": "["}]
      }
    ]

Every validation problem is reported as RuleError with the path of the
offending node.
"""

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple, Union

from ctxreplace.core.errors import ConfigurationError, RuleError
from ctxreplace.core.models import BlockReplace, ContextRule, InnerScope, TokenReplace, as_replacement
from ctxreplace.logging.helpers import get_logger
from ctxreplace.processing.block_finder import normalize_pairs

_log = get_logger('rules')


def _require_mapping(node: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise RuleError(path, f'expected an object, got {type(node).__name__}')
    return node


def _require_str(node: Mapping[str, Any], key: str, path: str) -> str:
    value = node.get(key)
    if not isinstance(value, str) or value == '':
        raise RuleError(path, f'{key!r} must be a non-empty string')
    return value


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _parse_block(node: Any, path: str) -> BlockReplace:
    node = _require_mapping(node, path)
    if 'open' not in node or 'close' not in node:
        raise RuleError(path, "'open' and 'close' are required")
    opens = _as_tuple(node['open'])
    closes = _as_tuple(node['close'])
    pattern = node.get('pattern', '%s')
    try:
        normalize_pairs(opens, closes)
        as_replacement(pattern)
    except ConfigurationError as exc:
        raise RuleError(path, str(exc)) from exc
    return BlockReplace(opens, closes, pattern)


def _parse_tokens(node: Any, path: str) -> Tuple[TokenReplace, ...]:
    if node is None:
        return ()
    items = [node] if isinstance(node, Mapping) else node
    if not isinstance(items, (list, tuple)):
        raise RuleError(path, 'expected an object or a list of objects')
    tokens: List[TokenReplace] = []
    for i, item in enumerate(items):
        item_path = f'{path}[{i}]'
        item = _require_mapping(item, item_path)
        search = _require_str(item, 'search', item_path)
        repl = item.get('replace', '')
        if not isinstance(repl, str):
            raise RuleError(item_path, "'replace' must be a string")
        tokens.append(TokenReplace(search, repl))
    return tuple(tokens)


def _parse_inner_scope(node: Any, path: str) -> InnerScope:
    node = _require_mapping(node, path)
    block = _parse_block(node['self_replace'], f'{path}.self_replace') if node.get('self_replace') else None
    tokens = _parse_tokens(node.get('token_replace'), f'{path}.token_replace')
    if block is None and not tokens:
        raise RuleError(path, "inner scope needs 'self_replace' or 'token_replace'")
    return InnerScope(block, tokens)


def _parse_rule(node: Any, path: str) -> ContextRule:
    node = _require_mapping(node, path)
    scope_start = _require_str(node, 'scope_start', path)
    scope_end = _require_str(node, 'scope_end', path)
    block = _parse_block(node['self_replace'], f'{path}.self_replace') if node.get('self_replace') else None

    raw_inner = node.get('inner_scopes') or []
    if not isinstance(raw_inner, (list, tuple)):
        raise RuleError(f'{path}.inner_scopes', 'expected a list')
    inner = tuple(_parse_inner_scope(n, f'{path}.inner_scopes[{i}]') for i, n in enumerate(raw_inner))
    if inner and block is None:
        raise RuleError(path, "'inner_scopes' require a 'self_replace' block rule")

    tokens = _parse_tokens(node.get('token_replace'), f'{path}.token_replace')
    return ContextRule(scope_start, scope_end, block, inner, tokens)


def rules_from_data(data: Any) -> Tuple[ContextRule, ...]:
    """Validate a decoded rule document (list of rules, or ``{"rules": [...]}``)."""
    if isinstance(data, Mapping) and 'rules' in data:
        data = data['rules']
    if not isinstance(data, (list, tuple)):
        raise RuleError('rules', 'expected a list of rules')
    return tuple(_parse_rule(node, f'rules[{i}]') for i, node in enumerate(data))


def coerce_rules(rules: Iterable[Union[ContextRule, Mapping[str, Any]]]) -> Tuple[ContextRule, ...]:
    """Accept ContextRule objects and raw mappings side by side."""
    out: List[ContextRule] = []
    for i, rule in enumerate(rules):
        out.append(rule if isinstance(rule, ContextRule) else _parse_rule(rule, f'rules[{i}]'))
    return tuple(out)


def load_rules(path: Union[str, Path]) -> Tuple[ContextRule, ...]:
    """Read and validate a JSON rule file."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding='utf-8'))
    except json.JSONDecodeError as exc:
        raise RuleError(str(p), f'invalid JSON: {exc}') from exc
    rules = rules_from_data(data)
    _log.debug('loaded %d rule(s) from %s', len(rules), p)
    return rules
