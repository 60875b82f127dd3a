"""Core data model, errors and protocols for ctxreplace."""
from .errors import ConfigurationError, CtxReplaceError, RuleError

__all__ = ['ConfigurationError', 'CtxReplaceError', 'RuleError']
