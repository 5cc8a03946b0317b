"""Text-or-pattern constraints used by matchers.

A constraint is one of:
- an exact text, compared with or without case,
- a compiled regular expression, tested with ``search``,
- an opaque predicate ``Callable[[str], bool]`` which owns its own case rules.
"""

import re
from typing import Callable, Optional, Pattern, Tuple, Union

Predicate = Callable[[str], bool]
Constraint = Union[str, Pattern[str], Predicate, "TextOrPattern"]


class TextOrPattern:
    """Exact text or pattern which an argument's text must match.

    Whether matching is done with case is normally decided by the parser's
    style, but can be forced per constraint with ``case_sensitive``.

    Example:
        >>> TextOrPattern("env").is_match("ENV", case_sensitive=False)
        True
        >>> TextOrPattern(re.compile(r"^v\\d+$")).is_match("v12", case_sensitive=True)
        True
    """

    __slots__ = ("_text", "_pattern", "_insensitive_pattern", "_predicate", "case_sensitive")

    def __init__(self, value: Constraint, case_sensitive: Optional[bool] = None):
        self._text: Optional[str] = None
        self._pattern: Optional[Pattern[str]] = None
        self._insensitive_pattern: Optional[Pattern[str]] = None
        self._predicate: Optional[Predicate] = None
        self.case_sensitive = case_sensitive

        if isinstance(value, TextOrPattern):
            self._text = value._text
            self._pattern = value._pattern
            self._insensitive_pattern = value._insensitive_pattern
            self._predicate = value._predicate
            if case_sensitive is None:
                self.case_sensitive = value.case_sensitive
        elif isinstance(value, str):
            self._text = value
        elif isinstance(value, re.Pattern):
            self._pattern = value
            self._insensitive_pattern = re.compile(
                value.pattern, value.flags | re.IGNORECASE
            )
        elif callable(value):
            self._predicate = value
        else:
            raise TypeError(
                f"Expected text, compiled pattern or predicate, got: {type(value).__name__}"
            )

    @classmethod
    def coerce(cls, value: Optional[Constraint]) -> Optional["TextOrPattern"]:
        """Wrap value unless it is None or already a TextOrPattern."""
        if value is None or isinstance(value, TextOrPattern):
            return value
        return cls(value)

    @property
    def text(self) -> Optional[str]:
        return self._text

    @property
    def pattern(self) -> Optional[Pattern[str]]:
        return self._pattern

    @property
    def is_text(self) -> bool:
        return self._text is not None

    def is_match(self, value: str, case_sensitive: bool) -> bool:
        """Test value against the constraint.

        Args:
            value: Text of the parameter, option code or option value.
            case_sensitive: Case rule of the parser, unless overridden by
                this constraint's own ``case_sensitive``.

        Returns:
            True if value satisfies the constraint.
        """
        if self.case_sensitive is not None:
            case_sensitive = self.case_sensitive

        if self._text is not None:
            if case_sensitive:
                return value == self._text
            return value.casefold() == self._text.casefold()

        if self._pattern is not None:
            pattern = self._pattern if case_sensitive else self._insensitive_pattern
            return pattern.search(value) is not None

        return bool(self._predicate(value))

    def signature(self, case_sensitive: bool) -> Tuple:
        """Key identifying constraints which accept exactly the same texts."""
        if self.case_sensitive is not None:
            case_sensitive = self.case_sensitive

        if self._text is not None:
            text = self._text if case_sensitive else self._text.casefold()
            return ("text", text)
        if self._pattern is not None:
            flags = self._pattern.flags if case_sensitive else self._insensitive_pattern.flags
            return ("pattern", self._pattern.pattern, flags)
        return ("predicate", id(self._predicate))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextOrPattern):
            return NotImplemented
        return (
            self._text == other._text
            and self._pattern == other._pattern
            and self._predicate == other._predicate
            and self.case_sensitive == other.case_sensitive
        )

    def __hash__(self) -> int:
        return hash((self._text, self._pattern, id(self._predicate), self.case_sensitive))

    def __repr__(self) -> str:
        if self._text is not None:
            described = repr(self._text)
        elif self._pattern is not None:
            described = f"re.compile({self._pattern.pattern!r})"
        else:
            described = getattr(self._predicate, "__name__", repr(self._predicate))
        if self.case_sensitive is None:
            return f"TextOrPattern({described})"
        return f"TextOrPattern({described}, case_sensitive={self.case_sensitive})"
