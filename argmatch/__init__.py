"""argmatch - style-driven command line parsing with tagged matchers.

Example:
    >>> from argmatch import CommandLineParser, StyleConfig, ValuePolicy
    >>> parser = CommandLineParser(StyleConfig(first_arg_is_binary=False))
    >>> parser.add_option_matcher("out", value_policy=ValuePolicy.ALWAYS, tag="output")
    >>> parser.parse_line("--out report.txt") == [OptionArg(0, "out", "report.txt", "output")]
    True
"""

from argmatch.parsing import (
    Arg,
    ArgKind,
    BinaryArg,
    CommandLineParser,
    EscapableClass,
    MatcherSet,
    OptionArg,
    OptionMatcher,
    ParamArg,
    ParamMatcher,
    ParseError,
    ParseErrorKind,
    ParseResult,
    ParseStatus,
    RawToken,
    StyleBuilder,
    StyleConfig,
    TextOrPattern,
    ValuePolicy,
    tokenize,
)

__version__ = "0.1.0"

__all__ = [
    "Arg",
    "ArgKind",
    "BinaryArg",
    "CommandLineParser",
    "EscapableClass",
    "MatcherSet",
    "OptionArg",
    "OptionMatcher",
    "ParamArg",
    "ParamMatcher",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "ParseStatus",
    "RawToken",
    "StyleBuilder",
    "StyleConfig",
    "TextOrPattern",
    "ValuePolicy",
    "tokenize",
]
