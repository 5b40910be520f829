"""
Pattern normalisation and format-template rendering.
Shared by every matching and substitution operation on a Look.
"""

import re
from typing import Callable, Optional, Union

import regex

# Characters escaped when a caller passes a plain string as a pattern
_LITERAL_META = re.compile(r'[|\\{}()[\]^$+*?.]')

# Recognised template tokens: $$, $& and $1..$9
_TEMPLATE_TOKEN = re.compile(r'\$([$&1-9])')

# Plain strings are literals; compiled patterns are reused by source
PatternArg = Union[str, regex.Pattern, re.Pattern]


def escape_literal(text: str) -> str:
    """Escape regex metacharacters so text is matched literally."""
    return _LITERAL_META.sub(lambda m: '\\' + m.group(0), text)


def pattern_source(pattern: PatternArg) -> str:
    """
    Resolve a pattern argument to regex source.

    A plain string is a literal and gets escaped. Anything carrying a
    ``pattern`` attribute (``regex.Pattern`` or ``re.Pattern``) is already
    regex-ready and its source is reused verbatim; its own flags are ignored.

    Raises:
        TypeError: if the argument is neither a string nor a compiled pattern
    """
    if isinstance(pattern, str):
        return escape_literal(pattern)

    source = getattr(pattern, 'pattern', None)
    if not isinstance(source, str):
        raise TypeError(f"Unsupported pattern type: {type(pattern).__name__}")
    return source


def render_template(template: str, group: Callable[[int], Optional[str]]) -> str:
    """
    Render a format template against one match.

    Args:
        template: Template containing $1..$9, $& and $$ tokens
        group: Lookup returning group N of the match (0 = whole match),
               or None when the group did not participate

    Returns:
        The rendered string. Unrecognised $-sequences stay in place.
    """
    def substitute(token: re.Match) -> str:
        kind = token.group(1)
        if kind == '$':
            return '$'
        if kind == '&':
            return group(0) or ''
        return group(int(kind)) or ''

    return _TEMPLATE_TOKEN.sub(substitute, template)
