"""Command line parser.

Combines the lexer and the resolver:
- parse_line: lex a command line, then resolve its tokens
- parse_arguments: resolve an already split argument vector
- try_parse_line / try_parse_arguments: same, returning a ParseResult
"""

from typing import List, Optional, Sequence

from argmatch.parsing.errors import ErrorReporter, ParseError
from argmatch.parsing.lexer import Lexer
from argmatch.parsing.matchers import MatcherSet, OptionMatcher, ParamMatcher
from argmatch.parsing.models import Arg, RawToken
from argmatch.parsing.resolver import Resolver
from argmatch.parsing.result import ParseResult
from argmatch.parsing.style import StyleConfig


class CommandLineParser:
    """Parses command lines into tagged arguments.

    The style and matchers are read, never changed, by a parse. Do not
    modify the matchers while a parse is running.

    Example:
        >>> parser = CommandLineParser(StyleConfig(first_arg_is_binary=False))
        >>> parser.add_option_matcher("env", value_policy=ValuePolicy.IF_POSSIBLE, tag="env")
        >>> parser.add_param_matcher(tag="word")
        >>> args = parser.parse_line('deploy --env=prod "my app"')
        >>> [(arg.tag, arg.index) for arg in args]
        [('word', 0), ('env', 0), ('word', 1)]
        >>> args[1].value
        'prod'
    """

    def __init__(self, style: Optional[StyleConfig] = None, matchers: Optional[MatcherSet] = None):
        """Initialize parser.

        Args:
            style: Lexical rules. Defaults to StyleConfig.line_defaults().
            matchers: Matchers to resolve against. Defaults to an empty set,
                which accepts every parameter and option.
        """
        self.style = style or StyleConfig.line_defaults()
        self.matchers = matchers if matchers is not None else MatcherSet()
        self.reporter = ErrorReporter()
        self._lexer = Lexer(self.style, self.reporter)
        self._resolver = Resolver(self.style, self.reporter)

    def add_param_matcher(self, *args, **kwargs) -> ParamMatcher:
        """Append a param matcher; see MatcherSet.add_param_matcher."""
        return self.matchers.add_param_matcher(*args, **kwargs)

    def add_option_matcher(self, *args, **kwargs) -> OptionMatcher:
        """Append an option matcher; see MatcherSet.add_option_matcher."""
        return self.matchers.add_option_matcher(*args, **kwargs)

    def tokenize(self, line: str) -> List[RawToken]:
        return self._lexer.tokenize(line)

    def parse_line(self, line: str) -> List[Arg]:
        """Parse a command line.

        Args:
            line: The command line, e.g. 'deploy --env=prod "my app"'.

        Returns:
            The resolved arguments in order of appearance.

        Raises:
            ParseError: If the line cannot be lexed or a token cannot be
                resolved. The arguments resolved before the failure are in
                ``error.partial``.
        """
        tokens, end_offset = self._lexer.scan(line)
        return self._resolver.resolve(tokens, self.matchers.snapshot(), end_offset)

    def parse_arguments(self, arguments: Sequence[str]) -> List[Arg]:
        """Parse an argument vector which is already split (e.g. sys.argv).

        Each string is one token; quote and escape characters are not
        interpreted.

        Raises:
            ParseError: If a token cannot be resolved.
        """
        tokens, end_offset = self._lexer.pre_split(list(arguments))
        return self._resolver.resolve(tokens, self.matchers.snapshot(), end_offset)

    def try_parse_line(self, line: str) -> ParseResult:
        try:
            return ParseResult.success(self.parse_line(line))
        except ParseError as e:
            return ParseResult.failure(e)

    def try_parse_arguments(self, arguments: Sequence[str]) -> ParseResult:
        try:
            return ParseResult.success(self.parse_arguments(arguments))
        except ParseError as e:
            return ParseResult.failure(e)
