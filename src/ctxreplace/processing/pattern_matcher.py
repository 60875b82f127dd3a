"""
pattern_matcher – Literal and regex-shaped delimiter search.

A delimiter is either a plain substring or a regex written in delimited
form (``/body/flags``, ``#body#i``, ``~body~s`` …). The shape is decided
once by :func:`classify_delimiter`; :func:`find` then searches from an
offset and reports the match plus every capturing group.
"""
from __future__ import annotations

import re
from typing import Dict, Optional, Pattern, Tuple

from ctxreplace.constants import REGEX_DELIMITERS, REGEX_MODIFIERS
from ctxreplace.core.models import Delimiter, GroupCapture, LiteralDelimiter, MatchResult, PatternDelimiter
from ctxreplace.logging.helpers import get_logger

_log = get_logger('processing.pattern')

_MODIFIER_FLAGS = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
}
# Accepted for compatibility, no Python equivalent.
_IGNORED_MODIFIERS = frozenset('SXJ')

_PCRE_NAMED_GROUP_RX = re.compile(r"\(\?<(?=[A-Za-z_])")
_PCRE_QUOTED_GROUP_RX = re.compile(r"\(\?'([A-Za-z_]\w*)'")
_BRACE_QUANTIFIER_RX = re.compile(r'\{\d+(?:,\d*)?\}')


def is_regex_shaped(source: str) -> bool:
    """Return True when *source* looks like a delimited regex with valid modifiers."""
    if len(source) < 3:
        return False
    first = source[0]
    if first not in REGEX_DELIMITERS:
        return False
    last = source.rfind(first)
    if last == 0:
        return False
    return all(ch in REGEX_MODIFIERS for ch in source[last + 1:])


def _split_delimited(source: str) -> Optional[Tuple[str, str]]:
    """Split ``/body/flags`` at the first unescaped closing delimiter.

    Returns None when that delimiter is not the last one in *source*
    (``/a/b/``) or when the last one is itself escaped (``/a\\/``).
    """
    delim = source[0]
    last = source.rfind(delim)
    pos = 1
    while pos < last:
        ch = source[pos]
        if ch == '\\':
            pos += 2
            continue
        if ch == delim:
            return None
        pos += 1
    if pos > last:
        return None
    return source[1:last], source[last + 1:]


def _translate_body(body: str, *, ungreedy: bool, dollar_end_only: bool) -> str:
    """Rewrite PCRE ``U`` and ``D`` semantics into plain ``re`` syntax.

    ``ungreedy`` flips the greediness of every quantifier; ``dollar_end_only``
    turns an unescaped ``$`` outside character classes into ``\\Z``.
    """
    out = []
    pos, size = 0, len(body)
    in_class = False
    while pos < size:
        ch = body[pos]
        if ch == '\\':
            out.append(body[pos:pos + 2])
            pos += 2
            continue
        if in_class:
            if ch == ']':
                in_class = False
            out.append(ch)
            pos += 1
            continue
        if ch == '[':
            in_class = True
            out.append(ch)
            pos += 1
            # ']' right after '[' or '[^' is a literal member
            if body.startswith('^', pos):
                out.append('^')
                pos += 1
            if body.startswith(']', pos):
                out.append(']')
                pos += 1
            continue
        if ch == '(' and body.startswith('?', pos + 1):
            out.append('(?')
            pos += 2
            continue
        if ch == '$' and dollar_end_only:
            out.append(r'\Z')
            pos += 1
            continue

        quantifier = None
        if ch in '*+?':
            quantifier = ch
        elif ch == '{':
            m = _BRACE_QUANTIFIER_RX.match(body, pos)
            if m:
                quantifier = m.group(0)
        if quantifier is None or not ungreedy:
            out.append(ch)
            pos += 1
            continue

        out.append(quantifier)
        pos += len(quantifier)
        if body.startswith('?', pos):
            pos += 1
        elif body.startswith('+', pos):
            out.append('+')
            pos += 1
        else:
            out.append('?')
    return ''.join(out)


def compile_delimiter_regex(source: str) -> Tuple[Optional[Pattern[str]], bool]:
    """Compile a regex-shaped *source* into a Python pattern.

    Returns:
        ``(regex, anchored)``; ``regex`` is None when the body does not compile.
    """
    parts = _split_delimited(source)
    if parts is None:
        _log.warning('⚠  invalid regex delimiter %r: unescaped delimiter inside the body (it will match nothing)', source)
        return None, False
    body, modifiers = parts
    flags = 0
    anchored = False
    for ch in modifiers:
        if ch in _MODIFIER_FLAGS:
            flags |= _MODIFIER_FLAGS[ch]
        elif ch == 'A':
            anchored = True
        elif ch in _IGNORED_MODIFIERS:
            _log.debug('modifier %r in %r has no effect', ch, source)

    body = _PCRE_NAMED_GROUP_RX.sub('(?P<', body)
    body = _PCRE_QUOTED_GROUP_RX.sub(r'(?P<\1>', body)
    # D is ignored by PCRE when m is set
    ungreedy = 'U' in modifiers
    dollar_end_only = 'D' in modifiers and 'm' not in modifiers
    if ungreedy or dollar_end_only:
        body = _translate_body(body, ungreedy=ungreedy, dollar_end_only=dollar_end_only)

    try:
        return re.compile(body, flags), anchored
    except re.error as exc:
        _log.warning('⚠  invalid regex delimiter %r: %s (it will match nothing)', source, exc)
        return None, anchored


def classify_delimiter(source: str) -> Delimiter:
    """Build the Delimiter variant for *source*."""
    if is_regex_shaped(source):
        regex, anchored = compile_delimiter_regex(source)
        return PatternDelimiter(source, regex, anchored)
    return LiteralDelimiter(source)


def _collect_groups(m: re.Match[str]) -> Dict[str, GroupCapture]:
    names = {idx: name for name, idx in m.re.groupindex.items()}
    groups: Dict[str, GroupCapture] = {}
    for idx in range(1, m.re.groups + 1):
        value = m.group(idx)
        if value is None:
            capture = GroupCapture(None, None, None, 0)
        else:
            start, end = m.span(idx)
            capture = GroupCapture(value, start, end, end - start)
        if idx in names:
            groups[names[idx]] = capture
        groups[f'group_{idx}'] = capture
    return groups


def find(text: str, delimiter: Delimiter, offset: int = 0) -> Optional[MatchResult]:
    """Find the first occurrence of *delimiter* in *text* at or after *offset*.

    Returns None when nothing matches or the delimiter is a malformed regex.
    """
    if isinstance(delimiter, LiteralDelimiter):
        pos = text.find(delimiter.source, offset)
        if pos < 0:
            return None
        return MatchResult(pos, pos + len(delimiter.source), delimiter.source)

    if delimiter.regex is None:
        return None
    if delimiter.anchored:
        m = delimiter.regex.match(text, offset)
    else:
        m = delimiter.regex.search(text, offset)
    if m is None:
        return None
    return MatchResult(m.start(), m.end(), m.group(0), _collect_groups(m))
