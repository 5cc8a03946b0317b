"""Command line style configuration.

Provides:
- EscapableClass: Logical groups of characters an escape character may precede
- StyleConfig: Immutable bundle of the lexical rules of a command line
- StyleBuilder: Chained, field-by-field construction of a StyleConfig
"""

from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class EscapableClass(str, Enum):
    """Logical characters which can follow an escape character."""

    ESCAPE = "escape"
    QUOTE = "quote"
    WHITESPACE = "whitespace"
    OPTION_ANNOUNCER = "option_announcer"
    OPTION_VALUE_ANNOUNCER = "option_value_announcer"
    TERMINATOR = "terminator"
    ALL = "all"


DEFAULT_ESCAPABLE_CLASSES: Tuple[EscapableClass, ...] = (
    EscapableClass.ESCAPE,
    EscapableClass.QUOTE,
    EscapableClass.WHITESPACE,
    EscapableClass.OPTION_ANNOUNCER,
    EscapableClass.OPTION_VALUE_ANNOUNCER,
    EscapableClass.TERMINATOR,
)

CHAR_SET_FIELDS: Tuple[str, ...] = (
    "quote_chars",
    "escape_chars",
    "escapable_chars",
    "option_announcer_chars",
    "option_value_announcer_chars",
    "terminator_chars",
)


class StyleConfig(BaseModel):
    """Lexical rules used to split and classify a command line.

    A style is frozen once built; the same instance can be shared by any
    number of parsers and parse calls.

    Attributes:
        quote_chars: Characters which open and close a quoted region.
        escape_chars: Characters which make the following character literal.
        escapable_classes: Logical characters an escape character may precede.
        escapable_chars: Extra literal characters an escape character may precede.
        embed_quote_with_double: Two successive quote characters inside a
            quoted region stand for one literal quote character.
        option_announcer_chars: Characters which start an option token.
        option_value_announcer_chars: Characters which separate an option code
            from its value. A whitespace member means the next token may be
            the option's value.
        terminator_chars: Characters which end the parse of the line when met
            outside a quoted region.
        case_sensitive: Whether text, codes and values are matched with case.
        params_case_sensitive: Override of case_sensitive for parameters.
        option_codes_case_sensitive: Override of case_sensitive for option codes.
        option_values_case_sensitive: Override of case_sensitive for option values.
        multi_char_option_code_requires_double_announcer: Option codes longer
            than one character must be introduced by two announcer characters.
        option_code_can_be_empty: A token made only of announcer characters
            is an option with an empty code (otherwise it is a parameter).
        first_arg_is_binary: The first token is the binary name or path.
    """

    model_config = ConfigDict(frozen=True)

    quote_chars: FrozenSet[str] = frozenset({'"', "'"})
    escape_chars: FrozenSet[str] = frozenset({"\\"})
    escapable_classes: Tuple[EscapableClass, ...] = DEFAULT_ESCAPABLE_CLASSES
    escapable_chars: FrozenSet[str] = frozenset()
    embed_quote_with_double: bool = False
    option_announcer_chars: FrozenSet[str] = frozenset({"-"})
    option_value_announcer_chars: FrozenSet[str] = frozenset({"=", " "})
    terminator_chars: FrozenSet[str] = frozenset()
    case_sensitive: bool = True
    params_case_sensitive: Optional[bool] = None
    option_codes_case_sensitive: Optional[bool] = None
    option_values_case_sensitive: Optional[bool] = None
    multi_char_option_code_requires_double_announcer: bool = False
    option_code_can_be_empty: bool = False
    first_arg_is_binary: bool = True

    @field_validator(*CHAR_SET_FIELDS, mode="before")
    @classmethod
    def _coerce_char_set(cls, value: Any) -> FrozenSet[str]:
        """Accept a string or any iterable of single characters."""
        if value is None:
            return frozenset()
        chars = frozenset(value)
        for char in chars:
            if not isinstance(char, str) or len(char) != 1:
                raise ValueError(f"Expected single characters, got: {char!r}")
        return chars

    @field_validator("escapable_classes", mode="before")
    @classmethod
    def _coerce_escapable_classes(cls, value: Any) -> Tuple[EscapableClass, ...]:
        if isinstance(value, (str, EscapableClass)):
            value = [value]
        return tuple(EscapableClass(item) for item in value)

    @model_validator(mode="after")
    def _check_roles_are_disjoint(self) -> "StyleConfig":
        """A character can only play one structural role."""
        roles = {
            "quote": self.quote_chars,
            "escape": self.escape_chars,
            "option announcer": self.option_announcer_chars,
            "terminator": self.terminator_chars,
        }
        names = list(roles)
        for i, first in enumerate(names):
            for second in names[i + 1 :]:
                shared = roles[first] & roles[second]
                if shared:
                    raise ValueError(
                        f"Characters {sorted(shared)} cannot be both {first} and {second} characters"
                    )

        for name in ("quote", "escape", "option announcer"):
            shared = roles[name] & self.option_value_announcer_chars
            if shared:
                raise ValueError(
                    f"Characters {sorted(shared)} cannot be both {name} and option value announcer characters"
                )
        return self

    @property
    def space_announces_value(self) -> bool:
        """Can the token after an option code be that option's value?"""
        return any(char.isspace() for char in self.option_value_announcer_chars)

    @property
    def inline_value_announcer_chars(self) -> FrozenSet[str]:
        """Value announcer characters which split a single token."""
        return frozenset(
            char for char in self.option_value_announcer_chars if not char.isspace()
        )

    @property
    def effective_params_case_sensitive(self) -> bool:
        if self.params_case_sensitive is None:
            return self.case_sensitive
        return self.params_case_sensitive

    @property
    def effective_option_codes_case_sensitive(self) -> bool:
        if self.option_codes_case_sensitive is None:
            return self.case_sensitive
        return self.option_codes_case_sensitive

    @property
    def effective_option_values_case_sensitive(self) -> bool:
        if self.option_values_case_sensitive is None:
            return self.case_sensitive
        return self.option_values_case_sensitive

    def can_escape(self, char: str) -> bool:
        """Check whether char may follow an escape character.

        Args:
            char: The character after the escape character.

        Returns:
            True if the escape sequence is valid for this style.
        """
        if char in self.escapable_chars:
            return True

        for escapable in self.escapable_classes:
            if escapable == EscapableClass.ALL:
                return True
            if escapable == EscapableClass.ESCAPE and char in self.escape_chars:
                return True
            if escapable == EscapableClass.QUOTE and char in self.quote_chars:
                return True
            if escapable == EscapableClass.WHITESPACE and char.isspace():
                return True
            if (
                escapable == EscapableClass.OPTION_ANNOUNCER
                and char in self.option_announcer_chars
            ):
                return True
            if (
                escapable == EscapableClass.OPTION_VALUE_ANNOUNCER
                and char in self.option_value_announcer_chars
            ):
                return True
            if escapable == EscapableClass.TERMINATOR and char in self.terminator_chars:
                return True
        return False

    @classmethod
    def line_defaults(cls) -> "StyleConfig":
        """Shell-like style for lines typed by a user."""
        return cls()

    @classmethod
    def env_args_defaults(cls) -> "StyleConfig":
        """Style for argument vectors already split by the operating system.

        The shell already removed quotes and escapes, so neither is
        configured.
        """
        return cls(
            quote_chars=frozenset(),
            escape_chars=frozenset(),
            escapable_classes=(),
        )

    @classmethod
    def builder(cls) -> "StyleBuilder":
        """Start building a style from the line defaults."""
        return StyleBuilder()

    def to_builder(self) -> "StyleBuilder":
        """Start building a style from this one."""
        return StyleBuilder(self)


class StyleBuilder:
    """Builds a StyleConfig one field at a time.

    Example:
        >>> style = (
        ...     StyleConfig.builder()
        ...     .quote_chars('"')
        ...     .terminator_chars("|>")
        ...     .first_arg_is_binary(False)
        ...     .build()
        ... )
    """

    def __init__(self, base: Optional[StyleConfig] = None):
        self._fields = dict(base.model_dump()) if base is not None else {}

    def _set(self, name: str, value: Any) -> "StyleBuilder":
        self._fields[name] = value
        return self

    def quote_chars(self, value: Iterable[str]) -> "StyleBuilder":
        return self._set("quote_chars", value)

    def escape_chars(self, value: Iterable[str]) -> "StyleBuilder":
        return self._set("escape_chars", value)

    def escapable_classes(self, value: Iterable[EscapableClass]) -> "StyleBuilder":
        return self._set("escapable_classes", tuple(value))

    def escapable_chars(self, value: Iterable[str]) -> "StyleBuilder":
        return self._set("escapable_chars", value)

    def embed_quote_with_double(self, value: bool) -> "StyleBuilder":
        return self._set("embed_quote_with_double", value)

    def option_announcer_chars(self, value: Iterable[str]) -> "StyleBuilder":
        return self._set("option_announcer_chars", value)

    def option_value_announcer_chars(self, value: Iterable[str]) -> "StyleBuilder":
        return self._set("option_value_announcer_chars", value)

    def terminator_chars(self, value: Iterable[str]) -> "StyleBuilder":
        return self._set("terminator_chars", value)

    def case_sensitive(self, value: bool) -> "StyleBuilder":
        return self._set("case_sensitive", value)

    def params_case_sensitive(self, value: Optional[bool]) -> "StyleBuilder":
        return self._set("params_case_sensitive", value)

    def option_codes_case_sensitive(self, value: Optional[bool]) -> "StyleBuilder":
        return self._set("option_codes_case_sensitive", value)

    def option_values_case_sensitive(self, value: Optional[bool]) -> "StyleBuilder":
        return self._set("option_values_case_sensitive", value)

    def multi_char_option_code_requires_double_announcer(
        self, value: bool
    ) -> "StyleBuilder":
        return self._set("multi_char_option_code_requires_double_announcer", value)

    def option_code_can_be_empty(self, value: bool) -> "StyleBuilder":
        return self._set("option_code_can_be_empty", value)

    def first_arg_is_binary(self, value: bool) -> "StyleBuilder":
        return self._set("first_arg_is_binary", value)

    def build(self) -> StyleConfig:
        """Validate and freeze the configured style.

        Raises:
            pydantic.ValidationError: If the configuration is contradictory.
        """
        return StyleConfig(**self._fields)
