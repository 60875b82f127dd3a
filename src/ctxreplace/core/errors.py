from __future__ import annotations

"""Exception hierarchy for ctxreplace."""


class CtxReplaceError(Exception):
    """Base class for every error raised by ctxreplace."""


class ConfigurationError(CtxReplaceError, ValueError):
    """Invalid call configuration, raised before any scanning happens."""


class RuleError(ConfigurationError):
    """A rule document could not be turned into rule objects.

    Attributes:
        path: Location of the offending node, e.g. ``rules[0].inner_scopes[1]``.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f'{path}: {message}')
        self.path = path
