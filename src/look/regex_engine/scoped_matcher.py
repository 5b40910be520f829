"""
Scoped matcher for narrowing, searching and rewriting text.
A Look never changes once built: every operation returns a new Look
or a plain value, while the full text stays available for splicing.
"""

import logging
import dataclasses
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

import regex  # Host regex engine for every generated pattern

from .formatting import PatternArg, pattern_source, render_template

logger = logging.getLogger(__name__)

_SCOPE_FIELDS = ('scope_start', 'scope_end')


@dataclass(frozen=True)
class Match:
    """A single match inside the scoped text."""
    matched_text: str
    start_pos: int  # relative to the scope start
    end_pos: int
    groups: Tuple[Optional[str], ...] = ()

    @classmethod
    def from_regex(cls, m: regex.Match) -> 'Match':
        return cls(
            matched_text=m.group(0),
            start_pos=m.start(),
            end_pos=m.end(),
            groups=tuple(m.groups()),
        )

    def group(self, index: int) -> Optional[str]:
        """Group by number; 0 is the whole match, missing groups give None."""
        if index == 0:
            return self.matched_text
        if 0 < index <= len(self.groups):
            return self.groups[index - 1]
        return None

    def render(self, template: str = '$&') -> str:
        return render_template(template, self.group)


@dataclass(frozen=True)
class Look:
    """
    Immutable window into a text.

    Attributes:
        text: Full, unscoped source text
        scope_start: Inclusive offset where the active scope begins
        scope_end: Exclusive offset where the active scope ends
                   (None resolves to len(text))
        case_sensitive: Match case exactly
        dot_newline: Let '.' match line breaks
    """
    text: str = ""
    scope_start: int = 0
    scope_end: Optional[int] = None
    case_sensitive: bool = False
    dot_newline: bool = True

    def __post_init__(self):
        if self.scope_end is None:
            object.__setattr__(self, 'scope_end', len(self.text))

        if not 0 <= self.scope_start <= self.scope_end <= len(self.text):
            raise ValueError(
                f"Invalid scope [{self.scope_start}, {self.scope_end}) "
                f"for text of length {len(self.text)}"
            )

    # Construction

    @classmethod
    def of(cls, text: str) -> 'Look':
        """Fresh Look over the whole of text with default flags."""
        return cls(text=text)

    @classmethod
    def from_options(cls, source: Union['Look', Mapping[str, Any]]) -> 'Look':
        """Build from a prior Look (copying its configuration) or a mapping of options."""
        if isinstance(source, Look):
            return dataclasses.replace(source)
        return cls(**dict(source))

    def clone(self, **overrides) -> 'Look':
        """
        Copy with the given fields overridden.

        Replacing ``text`` without naming a scope bound resets the scope
        to the whole new text.
        """
        if 'text' in overrides and not any(f in overrides for f in _SCOPE_FIELDS):
            overrides['scope_start'] = 0
            overrides['scope_end'] = len(overrides['text'])
        return dataclasses.replace(self, **overrides)

    def options(self, **overrides) -> 'Look':
        return self.clone(**overrides)

    def with_text(self, text: str) -> 'Look':
        """Same flags, new text, scope spanning all of it."""
        return self.clone(text=text, scope_start=0, scope_end=len(text))

    @property
    def scoped_text(self) -> str:
        return self.text[self.scope_start:self.scope_end]

    # Scope narrowing

    def after(self, pattern: PatternArg) -> 'Look':
        """Move the scope start past the first match; collapse to the end if none."""
        result = self.raw_match(pattern)
        if result is None:
            logger.debug("after(%r): no match, scope collapsed at %d", pattern, self.scope_end)
            return self.clone(scope_start=self.scope_end)
        return self.clone(scope_start=self.scope_start + result.end_pos)

    def before(self, pattern: PatternArg) -> 'Look':
        """Move the scope end to the first match; collapse to the start if none."""
        result = self.raw_match(pattern)
        if result is None:
            logger.debug("before(%r): no match, scope collapsed at %d", pattern, self.scope_start)
            return self.clone(scope_end=self.scope_start)
        return self.clone(scope_end=self.scope_start + result.start_pos)

    def between(self, start_pattern: PatternArg, end_pattern: PatternArg) -> 'Look':
        return self.after(start_pattern).before(end_pattern)

    # Matching

    def raw_match(self, pattern: PatternArg) -> Optional[Match]:
        """First match in the scoped text, offsets relative to the scope start."""
        m = self.generate_regexp(pattern).search(self.scoped_text)
        return Match.from_regex(m) if m else None

    def raw_match_all(self, pattern: PatternArg) -> List[Match]:
        compiled = self.generate_regexp(pattern)
        return [Match.from_regex(m) for m in compiled.finditer(self.scoped_text)]

    def find(self, pattern: PatternArg, format: str = '$&') -> Optional[str]:
        result = self.raw_match(pattern)
        if result is None:
            return None
        return result.render(format)

    def find_all(self, pattern: PatternArg, format: str = '$&') -> List[str]:
        return [m.render(format) for m in self.raw_match_all(pattern)]

    # Substitution

    def replace(self, pattern: PatternArg, replacement: str) -> str:
        """
        Substitute the first match in scope.

        Args:
            pattern: Literal string or compiled pattern
            replacement: Template using $1..$9, $& and $$

        Returns:
            The complete text with the scoped part rewritten
        """
        return self._substitute(pattern, replacement, count=1)

    def replace_all(self, pattern: PatternArg, replacement: str) -> str:
        return self._substitute(pattern, replacement, count=0)

    def replace_scoped_text(self, replacement: str) -> str:
        """Splice replacement in place of the scoped text and return the full result."""
        return self.text[:self.scope_start] + replacement + self.text[self.scope_end:]

    def _substitute(self, pattern: PatternArg, replacement: str, count: int) -> str:
        compiled = self.generate_regexp(pattern)
        new_scoped_text = compiled.sub(
            lambda m: Match.from_regex(m).render(replacement),
            self.scoped_text,
            count=count,
        )
        return self.replace_scoped_text(new_scoped_text)

    # Pattern compilation

    def regex_flags(self) -> int:
        flags = regex.MULTILINE
        if self.dot_newline:
            flags |= regex.DOTALL
        else:
            # Unicode line separators: '.' then also stops at \r, \u2028 and \u2029.
            # Side effect: \b and \B follow default Unicode word boundaries.
            flags |= regex.WORD
        if not self.case_sensitive:
            flags |= regex.IGNORECASE
        return flags

    def generate_regexp(self, pattern: PatternArg) -> regex.Pattern:
        """
        Compile a pattern argument with this Look's flags.

        Raises:
            regex.error: if the pattern source is not a valid expression
        """
        return regex.compile(pattern_source(pattern), self.regex_flags())

    def validate_pattern(self, pattern: PatternArg) -> Tuple[bool, str]:
        """
        Validate a pattern argument without raising.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            self.generate_regexp(pattern)
            return True, ""
        except (regex.error, TypeError) as e:
            return False, str(e)


def look(text: str) -> Look:
    """Shortcut for Look.of(text)."""
    return Look.of(text)


ScopedMatcher = Look
