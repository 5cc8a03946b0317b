"""Parse error taxonomy and reporting.

Provides:
- ParseErrorKind: Enum of everything that can stop a parse
- ParseError: Exception carrying the kind, position and offending text
- ErrorReporter: Builds (and logs) ParseErrors for the lexer and resolver
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from argmatch.logging import get_module_logger
from argmatch.parsing.models import Arg

logger = get_module_logger()


class ParseErrorKind(str, Enum):
    """Kinds of parse errors."""

    UNTERMINATED_QUOTE = "unterminated_quote"
    INVALID_ESCAPE = "invalid_escape"
    UNMATCHED_TOKEN = "unmatched_token"
    AMBIGUOUS_MATCH = "ambiguous_match"
    MISSING_REQUIRED_VALUE = "missing_required_value"
    UNEXPECTED_ANNOUNCER = "unexpected_announcer"
    MISSING_DOUBLE_ANNOUNCER = "missing_double_announcer"

    @property
    def default_text(self) -> str:
        """Default (English) description of the error kind."""
        return _DEFAULT_TEXTS[self]


_DEFAULT_TEXTS = {
    ParseErrorKind.UNTERMINATED_QUOTE: "Quoted text is missing its closing quote character",
    ParseErrorKind.INVALID_ESCAPE: "Character cannot be escaped",
    ParseErrorKind.UNMATCHED_TOKEN: "Argument not matched",
    ParseErrorKind.AMBIGUOUS_MATCH: "Argument matched by contradictory matchers",
    ParseErrorKind.MISSING_REQUIRED_VALUE: "Option missing value",
    ParseErrorKind.UNEXPECTED_ANNOUNCER: "Option value cannot begin with option announcer",
    ParseErrorKind.MISSING_DOUBLE_ANNOUNCER: "Option code missing double announcer",
}


@dataclass(eq=False)
class ParseError(Exception):
    """Raised when a command line cannot be lexed or resolved.

    Attributes:
        kind: What went wrong.
        offset: Character offset in the line where the problem was found.
        text: The offending text.
        arg_index: Index the failing argument would have had.
        param_index: Parameter index, when a parameter failed.
        option_index: Option index, when an option failed.
        partial: Arguments resolved before the failure.
    """

    kind: ParseErrorKind
    offset: int
    text: str = ""
    arg_index: Optional[int] = None
    param_index: Optional[int] = None
    option_index: Optional[int] = None
    partial: Tuple[Arg, ...] = ()

    def __str__(self) -> str:
        """Format error message for display."""
        result = f"{self.kind.default_text} at offset {self.offset}"
        if self.arg_index is not None:
            result += f" (arg {self.arg_index})"
        if self.text:
            result += f": {self.text}"
        return result

    def __reduce__(self):
        # Exception pickling replays self.args, which the dataclass __init__ leaves empty
        return (
            self.__class__,
            (
                self.kind,
                self.offset,
                self.text,
                self.arg_index,
                self.param_index,
                self.option_index,
                self.partial,
            ),
        )


class ErrorReporter:
    """Builds the ParseErrors raised by the lexer and the resolver.

    Every error is logged once, here, so callers only need to handle the
    exception.
    """

    def error(
        self,
        kind: ParseErrorKind,
        offset: int,
        text: str = "",
        arg_index: Optional[int] = None,
        param_index: Optional[int] = None,
        option_index: Optional[int] = None,
        partial: Sequence[Arg] = (),
    ) -> ParseError:
        """Create a ParseError.

        Args:
            kind: Error kind.
            offset: Character offset of the problem.
            text: Offending text.
            arg_index: Index of the failing argument.
            param_index: Parameter index of the failing argument.
            option_index: Option index of the failing argument.
            partial: Arguments resolved before the failure.

        Returns:
            The error, ready to be raised.
        """
        logger.warning(
            "parse_failed",
            kind=kind.value,
            offset=offset,
            text=text,
            arg_index=arg_index,
        )
        return ParseError(
            kind=kind,
            offset=offset,
            text=text,
            arg_index=arg_index,
            param_index=param_index,
            option_index=option_index,
            partial=tuple(partial),
        )

    def unterminated_quote(self, offset: int, text: str) -> ParseError:
        return self.error(ParseErrorKind.UNTERMINATED_QUOTE, offset, text)

    def invalid_escape(self, offset: int, text: str) -> ParseError:
        return self.error(ParseErrorKind.INVALID_ESCAPE, offset, text)

    def missing_double_announcer(self, offset: int, text: str) -> ParseError:
        return self.error(ParseErrorKind.MISSING_DOUBLE_ANNOUNCER, offset, text)
