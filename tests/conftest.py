"""Shared fixtures for argmatch tests."""

import pytest

from argmatch.parsing import (
    CommandLineParser,
    ErrorReporter,
    Lexer,
    MatcherSet,
    Resolver,
    StyleConfig,
)


@pytest.fixture
def style():
    """Shell-like style without a binary as first argument."""
    return StyleConfig(first_arg_is_binary=False)


@pytest.fixture
def binary_style():
    """Shell-like defaults (first argument is the binary)."""
    return StyleConfig.line_defaults()


@pytest.fixture
def lexer(style):
    return Lexer(style)


@pytest.fixture
def resolver(style):
    return Resolver(style)


@pytest.fixture
def matchers():
    return MatcherSet()


@pytest.fixture
def reporter():
    return ErrorReporter()


@pytest.fixture
def make_parser():
    """Factory for parsers with a style built from keyword overrides."""

    def _make_parser(**style_fields):
        style_fields.setdefault("first_arg_is_binary", False)
        return CommandLineParser(StyleConfig(**style_fields))

    return _make_parser
