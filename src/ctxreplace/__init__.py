from __future__ import annotations

from ctxreplace.cli import CtxReplace
from ctxreplace.contextual import ContextualReplacer, apply_contexts
from ctxreplace.core.errors import ConfigurationError, CtxReplaceError, RuleError
from ctxreplace.core.models import (
    Block,
    BlockReplace,
    Callback,
    ContextRule,
    FreeRange,
    InnerScope,
    MatchResult,
    Template,
    TokenReplace,
)
from ctxreplace.engine import custom_replace, replace, scoped_replace_all
from ctxreplace.rules.loader import load_rules

__version__ = '1.0.0'

__all__ = [
    'Block',
    'BlockReplace',
    'Callback',
    'ConfigurationError',
    'ContextRule',
    'ContextualReplacer',
    'CtxReplace',
    'CtxReplaceError',
    'FreeRange',
    'InnerScope',
    'MatchResult',
    'RuleError',
    'Template',
    'TokenReplace',
    'apply_contexts',
    'custom_replace',
    'load_rules',
    'replace',
    'scoped_replace_all',
]
