"""Command line parsing.

Provides style-driven tokenization of command lines and resolution of the
tokens against caller-registered, tagged matchers.
"""

from argmatch.parsing.errors import ErrorReporter, ParseError, ParseErrorKind
from argmatch.parsing.lexer import Lexer, LexState, pre_split_token, tokenize
from argmatch.parsing.matchers import MatcherSet, OptionMatcher, ParamMatcher
from argmatch.parsing.models import (
    Arg,
    ArgKind,
    BinaryArg,
    OptionArg,
    ParamArg,
    RawToken,
    ValuePolicy,
)
from argmatch.parsing.parser import CommandLineParser
from argmatch.parsing.patterns import TextOrPattern
from argmatch.parsing.resolver import Resolver
from argmatch.parsing.result import ParseResult, ParseStatus
from argmatch.parsing.style import EscapableClass, StyleBuilder, StyleConfig

__all__ = [
    "Arg",
    "ArgKind",
    "BinaryArg",
    "CommandLineParser",
    "ErrorReporter",
    "EscapableClass",
    "LexState",
    "Lexer",
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
    "Resolver",
    "StyleBuilder",
    "StyleConfig",
    "TextOrPattern",
    "ValuePolicy",
    "pre_split_token",
    "tokenize",
]
