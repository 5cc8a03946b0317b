"""Token and argument models for command line parsing.

Provides:
- ArgKind: Enum of the kinds of resolved arguments
- ValuePolicy: Enum of the ways an option matcher takes a value
- RawToken: A lexed span of the command line
- BinaryArg, ParamArg, OptionArg: The resolved, tagged arguments
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, TypeVar, Union

TagT = TypeVar("TagT")


class ArgKind(str, Enum):
    """Kinds of resolved arguments."""

    BINARY = "binary"
    PARAM = "param"
    OPTION = "option"


class ValuePolicy(str, Enum):
    """How an option matcher decides whether an option has a value."""

    NONE = "none"
    IF_POSSIBLE = "if_possible"
    ALWAYS = "always"


@dataclass(frozen=True)
class RawToken:
    """A lexed span of the command line.

    Attributes:
        text: Logical text of the token with quotes removed and escapes resolved.
        start: Offset of the first character of the token in the line.
        end: Offset just past the last character of the token.
        announced: Token starts with an unquoted, unescaped option announcer.
        code: Option code (announced tokens only).
        value: Inline option value split off by a value announcer such as '='.
        value_start: Offset of the first character of the inline value.
        source_index: Index of the pre-split argument the token came from.
        leading_announcer: First character is an unquoted, unescaped option
            announcer (true for announcer-only tokens such as '-' as well).
        value_leading_announcer: Inline value starts with an unquoted,
            unescaped option announcer.
    """

    text: str
    start: int
    end: int
    announced: bool = False
    code: Optional[str] = None
    value: Optional[str] = None
    value_start: Optional[int] = None
    source_index: int = 0
    leading_announcer: bool = False
    value_leading_announcer: bool = False

    @property
    def has_inline_value(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class BinaryArg:
    """The first argument, holding the binary name or path.

    Attributes:
        path: Binary name or path.
        arg_index: Always 0.
        offset: Offset of the binary in the line.
        source_index: Index of the pre-split argument the token came from.
    """

    path: str
    arg_index: int = field(default=0, compare=False)
    offset: int = field(default=0, compare=False)
    source_index: int = field(default=0, compare=False)

    kind: ClassVar[ArgKind] = ArgKind.BINARY


@dataclass(frozen=True)
class ParamArg(Generic[TagT]):
    """A resolved parameter.

    Attributes:
        index: Position among parameters (binary excluded).
        text: Parameter text.
        tag: Tag of the matcher which matched the parameter.
        arg_index: Position among all arguments (binary included).
        offset: Offset of the parameter in the line.
        source_index: Index of the pre-split argument the token came from.
        matcher: The matcher which matched the parameter.
    """

    index: int
    text: str
    tag: Optional[TagT] = None
    arg_index: int = field(default=0, compare=False)
    offset: int = field(default=0, compare=False)
    source_index: int = field(default=0, compare=False)
    matcher: Any = field(default=None, compare=False, repr=False)

    kind: ClassVar[ArgKind] = ArgKind.PARAM


@dataclass(frozen=True)
class OptionArg(Generic[TagT]):
    """A resolved option.

    Attributes:
        index: Position among options.
        code: Option code without its announcer characters.
        value: Option value, or None if the option has no value.
        tag: Tag of the matcher which matched the option.
        arg_index: Position among all arguments (binary included).
        offset: Offset of the option in the line.
        source_index: Index of the pre-split argument the token came from.
        matcher: The matcher which matched the option.
    """

    index: int
    code: str
    value: Optional[str] = None
    tag: Optional[TagT] = None
    arg_index: int = field(default=0, compare=False)
    offset: int = field(default=0, compare=False)
    source_index: int = field(default=0, compare=False)
    matcher: Any = field(default=None, compare=False, repr=False)

    kind: ClassVar[ArgKind] = ArgKind.OPTION

    @property
    def has_value(self) -> bool:
        return self.value is not None


Arg = Union[BinaryArg, ParamArg, OptionArg]
