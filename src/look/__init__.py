"""
look - fluent, immutable text scoping and pattern matching.

Usage:
    from look import Look

    Look.of("I scream, you scream").after("you").replace("scream", "dream")
"""

__version__ = "0.1.0"

from .regex_engine import Look, ScopedMatcher, Match, look

__all__ = [
    "__version__",
    "Look",
    "ScopedMatcher",
    "Match",
    "look",
]
