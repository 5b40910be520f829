"""Scoped regex engine: narrowing, matching and splicing over immutable text windows."""

from .scoped_matcher import Look, ScopedMatcher, Match, look
from .formatting import PatternArg, escape_literal, pattern_source, render_template

__all__ = [
    'Look',
    'ScopedMatcher',
    'Match',
    'look',
    'PatternArg',
    'escape_literal',
    'pattern_source',
    'render_template',
]
