import logging
import re
from typing import Callable, List, Optional, Sequence, Union

from ctxreplace.core.models import LiteralDelimiter, TokenReplace
from ctxreplace.logging.helpers import get_logger
from ctxreplace.processing.pattern_matcher import classify_delimiter

_PHP_GROUP_REF_RX = re.compile(r'\$(?:(\d+)|\{(\d+)\})')

CompiledToken = Callable[[str], str]


class TokenReplacer:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        """Literal or regex-driven token search/replace."""
        self._log = logger or get_logger('processing.tokens')

    @staticmethod
    def _python_replacement(replacement: str) -> str:
        return _PHP_GROUP_REF_RX.sub(lambda m: r'\g<%s>' % (m.group(1) or m.group(2)), replacement)

    def compile_token(self, token: TokenReplace) -> Optional[CompiledToken]:
        """Turn *token* into a ``str -> str`` function, or None if it can never match."""
        if token.search == '':
            self._log.warning('⚠  empty token search ignored')
            return None

        delim = classify_delimiter(token.search)
        if isinstance(delim, LiteralDelimiter):
            search, repl = token.search, token.replace
            return lambda text: text.replace(search, repl)

        if delim.regex is None:
            return None
        regex = delim.regex
        if delim.anchored:
            regex = re.compile(r'\A(?:%s)' % regex.pattern, regex.flags)
        repl = self._python_replacement(token.replace)

        def _sub(text: str) -> str:
            try:
                return regex.sub(repl, text)
            except re.error as exc:
                self._log.warning('⚠  bad replacement %r for %r: %s', token.replace, token.search, exc)
                return text

        return _sub

    def apply(self, text: str, tokens: Sequence[Union[TokenReplace, CompiledToken]]) -> str:
        """Apply every token rule to *text* in order."""
        compiled: List[CompiledToken] = []
        for token in tokens:
            fn = self.compile_token(token) if isinstance(token, TokenReplace) else token
            if fn is not None:
                compiled.append(fn)
        for fn in compiled:
            text = fn(text)
        return text


def apply_tokens(text: str, tokens: Sequence[TokenReplace]) -> str:
    """Module-level shortcut for :meth:`TokenReplacer.apply`."""
    return TokenReplacer().apply(text, tokens)
