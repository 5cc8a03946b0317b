"""Style-driven command line lexer.

Splits a command line into RawTokens with a small explicit state machine
whose character classes (quotes, escapes, announcers, terminators) come from
a StyleConfig at runtime.

States:
- BETWEEN: skipping whitespace between tokens
- IN_TOKEN: inside an unquoted part of a token
- IN_QUOTE: inside a quoted region
- QUOTE_CLOSING: a quote character was seen inside a quoted region; it is
  either the closing quote or the first half of a doubled (embedded) quote
- ESCAPED: the previous character was an escape character
- DONE: a terminator character ended the line
"""

from enum import Enum
from typing import List, Optional, Tuple

from argmatch.logging import get_module_logger
from argmatch.parsing.errors import ErrorReporter
from argmatch.parsing.models import RawToken
from argmatch.parsing.style import StyleConfig

logger = get_module_logger()

MAX_LEADING_ANNOUNCERS = 2


class LexState(Enum):
    BETWEEN = "between"
    IN_TOKEN = "in_token"
    IN_QUOTE = "in_quote"
    QUOTE_CLOSING = "quote_closing"
    ESCAPED = "escaped"
    DONE = "done"


class TokenBuilder:
    """Accumulates the logical characters of one token.

    Tracks whether the token is option-like while characters arrive, so
    quoted or escaped characters never count as announcers or value
    announcers.
    """

    def __init__(self, style: StyleConfig, start: int, source_index: int = 0):
        self.style = style
        self.start = start
        self.source_index = source_index
        self.chars: List[str] = []
        self.announced = False
        self.lead_count = 0
        self._lead_open = True
        self.split_at: Optional[int] = None
        self.value_start: Optional[int] = None
        self.value_announced = False

    def append(self, char: str, offset: int, literal: bool) -> None:
        """Add a logical character.

        Args:
            char: The character.
            offset: Offset of the character in the line.
            literal: The character was quoted or escaped.
        """
        position = len(self.chars)
        if position == 0 and not literal and char in self.style.option_announcer_chars:
            self.announced = True
            self.lead_count = 1
        elif (
            self.announced
            and self._lead_open
            and not literal
            and position == self.lead_count
            and self.lead_count < MAX_LEADING_ANNOUNCERS
            and char == self.chars[0]
        ):
            self.lead_count += 1
        else:
            self._lead_open = False
            if (
                self.split_at is not None
                and position == self.split_at + 1
                and not literal
                and char in self.style.option_announcer_chars
            ):
                self.value_announced = True
            if (
                self.announced
                and self.split_at is None
                and not literal
                and char in self.style.inline_value_announcer_chars
            ):
                self.split_at = position
                self.value_start = offset + 1
        self.chars.append(char)

    def finish(self, end: int, reporter: ErrorReporter) -> RawToken:
        """Build the RawToken, splitting option code from inline value.

        The double announcer rule does not apply to the binary.

        Raises:
            ParseError: If the double announcer rule is broken.
        """
        text = "".join(self.chars)
        plain = RawToken(
            text=text,
            start=self.start,
            end=end,
            source_index=self.source_index,
            leading_announcer=self.announced,
        )
        if not self.announced:
            return plain

        code_end = self.split_at if self.split_at is not None else len(text)
        code = text[self.lead_count : code_end]
        if not code and not self.style.option_code_can_be_empty:
            return plain

        is_binary = self.style.first_arg_is_binary and self.source_index == 0
        if (
            self.style.multi_char_option_code_requires_double_announcer
            and not is_binary
            and self.lead_count < MAX_LEADING_ANNOUNCERS
            and len(code) > 1
        ):
            raise reporter.missing_double_announcer(self.start, text)

        value = text[self.split_at + 1 :] if self.split_at is not None else None
        return RawToken(
            text=text,
            start=self.start,
            end=end,
            announced=True,
            code=code,
            value=value,
            value_start=self.value_start,
            source_index=self.source_index,
            leading_announcer=True,
            value_leading_announcer=self.value_announced,
        )


class _LineScan:
    """State for one pass over one line."""

    def __init__(self, line: str, style: StyleConfig, reporter: ErrorReporter):
        self.line = line
        self.style = style
        self.reporter = reporter
        self.tokens: List[RawToken] = []
        self.token: Optional[TokenBuilder] = None
        self.quote_char: Optional[str] = None
        self.quote_offset = 0
        self.escape_offset = 0
        self.escape_return = LexState.IN_TOKEN
        self.end_offset = len(line)
        self._handlers = {
            LexState.BETWEEN: self._between,
            LexState.IN_TOKEN: self._in_token,
            LexState.IN_QUOTE: self._in_quote,
            LexState.QUOTE_CLOSING: self._quote_closing,
            LexState.ESCAPED: self._escaped,
        }

    def run(self) -> Tuple[List[RawToken], int]:
        state = LexState.BETWEEN
        for offset, char in enumerate(self.line):
            state = self._handlers[state](char, offset)
            if state == LexState.DONE:
                return self.tokens, self.end_offset

        if state == LexState.ESCAPED:
            raise self.reporter.invalid_escape(self.escape_offset, self.line[self.escape_offset :])
        if state == LexState.IN_QUOTE:
            raise self.reporter.unterminated_quote(self.quote_offset, self.line[self.token.start :])
        if self.token is not None:
            self._emit(len(self.line))
        return self.tokens, self.end_offset

    def _emit(self, end: int) -> None:
        self.tokens.append(self.token.finish(end, self.reporter))
        self.token = None

    def _terminate(self, offset: int) -> LexState:
        if self.token is not None:
            self._emit(offset)
        self.end_offset = offset
        return LexState.DONE

    def _between(self, char: str, offset: int) -> LexState:
        if char in self.style.terminator_chars:
            return self._terminate(offset)
        if char.isspace():
            return LexState.BETWEEN
        self.token = TokenBuilder(self.style, offset, source_index=len(self.tokens))
        return self._in_token(char, offset)

    def _in_token(self, char: str, offset: int) -> LexState:
        if char in self.style.terminator_chars:
            return self._terminate(offset)
        if char.isspace():
            self._emit(offset)
            return LexState.BETWEEN
        if char in self.style.quote_chars:
            self.quote_char = char
            self.quote_offset = offset
            return LexState.IN_QUOTE
        if char in self.style.escape_chars:
            return self._start_escape(offset, LexState.IN_TOKEN)
        self.token.append(char, offset, literal=False)
        return LexState.IN_TOKEN

    def _in_quote(self, char: str, offset: int) -> LexState:
        if char == self.quote_char:
            if self.style.embed_quote_with_double:
                return LexState.QUOTE_CLOSING
            self.quote_char = None
            return LexState.IN_TOKEN
        if char in self.style.escape_chars:
            return self._start_escape(offset, LexState.IN_QUOTE)
        self.token.append(char, offset, literal=True)
        return LexState.IN_QUOTE

    def _quote_closing(self, char: str, offset: int) -> LexState:
        if char == self.quote_char:
            self.token.append(char, offset, literal=True)
            return LexState.IN_QUOTE
        self.quote_char = None
        return self._in_token(char, offset)

    def _start_escape(self, offset: int, return_state: LexState) -> LexState:
        self.escape_offset = offset
        self.escape_return = return_state
        return LexState.ESCAPED

    def _escaped(self, char: str, offset: int) -> LexState:
        if not self.style.can_escape(char):
            raise self.reporter.invalid_escape(
                self.escape_offset, self.line[self.escape_offset : offset + 1]
            )
        self.token.append(char, offset, literal=True)
        return self.escape_return


class Lexer:
    """Splits command lines into RawTokens according to a style.

    A Lexer holds no per-line state and can be shared.

    Example:
        >>> tokens, end = Lexer(StyleConfig()).scan('copy "my file" --force')
        >>> [token.text for token in tokens]
        ['copy', 'my file', '--force']
    """

    def __init__(self, style: Optional[StyleConfig] = None, reporter: Optional[ErrorReporter] = None):
        self.style = style or StyleConfig()
        self.reporter = reporter or ErrorReporter()

    def scan(self, line: str) -> Tuple[List[RawToken], int]:
        """Tokenize a line.

        Args:
            line: The command line.

        Returns:
            The tokens, and the end-of-input offset (the length of the line,
            or the offset of the terminator character which stopped lexing).

        Raises:
            ParseError: UNTERMINATED_QUOTE, INVALID_ESCAPE or
                MISSING_DOUBLE_ANNOUNCER.
        """
        tokens, end_offset = _LineScan(line, self.style, self.reporter).run()
        logger.debug(
            "line_tokenized",
            token_count=len(tokens),
            end_offset=end_offset,
            terminated=end_offset < len(line),
        )
        return tokens, end_offset

    def tokenize(self, line: str) -> List[RawToken]:
        tokens, _ = self.scan(line)
        return tokens

    def pre_split(self, arguments: List[str]) -> Tuple[List[RawToken], int]:
        """Turn an already split argument vector into RawTokens.

        Quote and escape characters are not interpreted. Offsets are
        computed as though the arguments were joined by single spaces.

        Returns:
            The tokens and the end-of-input offset.
        """
        tokens: List[RawToken] = []
        offset = 0
        for source_index, text in enumerate(arguments):
            tokens.append(pre_split_token(text, offset, self.style, source_index, self.reporter))
            offset += len(text) + 1
        return tokens, max(offset - 1, 0)


def pre_split_token(
    text: str,
    start: int,
    style: StyleConfig,
    source_index: int = 0,
    reporter: Optional[ErrorReporter] = None,
) -> RawToken:
    """Classify one pre-split argument without quote or escape handling."""
    builder = TokenBuilder(style, start, source_index=source_index)
    for position, char in enumerate(text):
        builder.append(char, start + position, literal=False)
    return builder.finish(start + len(text), reporter or ErrorReporter())


def tokenize(line: str, style: Optional[StyleConfig] = None) -> List[RawToken]:
    """Tokenize a line with a style (shell-like defaults when omitted)."""
    return Lexer(style).tokenize(line)
