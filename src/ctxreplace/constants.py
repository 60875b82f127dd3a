from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

import re

# Characters accepted as the opening/closing delimiter of a regex-shaped pattern.
REGEX_DELIMITERS: frozenset[str] = frozenset('/#~@;%`')

# Modifier letters accepted after the closing regex delimiter.
REGEX_MODIFIERS: str = 'imsxADSUXJu'

# Template used when the caller does not provide a replacement pattern.
DEFAULT_TEMPLATE: str = '%s'

# Placeholder substituted by the block inner text inside a template.
TEMPLATE_PLACEHOLDER: str = '%s'

# Glue inserted before a synthesized section end marker.
SYNTHETIC_END_SEPARATOR: str = ' '

# Block comments (non-greedy) and line comments, captured for re.split.
COMMENT_SPLIT_RE: re.Pattern[str] = re.compile(r'(/\*[\s\S]*?\*/|//[^\n]*)')

# Environment switches.
ENV_JSON_LOGS: str = 'CTXREPLACE_JSON_LOGS'
ENV_TRACE_SCAN: str = 'CTXREPLACE_TRACE_SCAN'
ENV_VERSION: str = 'CTXREPLACE_VERSION'
