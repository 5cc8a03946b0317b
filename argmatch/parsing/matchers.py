"""Argument matcher definitions.

Provides:
- ParamMatcher: Rule matching parameter arguments
- OptionMatcher: Rule matching option arguments (and their values)
- MatcherSet: Ordered, caller-populated collection of matchers

Matchers are tried in registration order and the first one satisfied wins.
Put more specific matchers before more general ones.
"""

from dataclasses import dataclass
from typing import (
    ClassVar,
    FrozenSet,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
)

from argmatch.logging import get_module_logger
from argmatch.parsing.models import ArgKind, TagT, ValuePolicy
from argmatch.parsing.patterns import Constraint, TextOrPattern

logger = get_module_logger()

IndexConstraint = Union[int, Iterable[int], None]


def _normalise_indices(value: IndexConstraint) -> Optional[FrozenSet[int]]:
    """Turn an index constraint into a frozenset (or None for any index)."""
    if value is None:
        return None
    indices = frozenset([value]) if isinstance(value, int) else frozenset(value)
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise ValueError(f"Index constraints must be non-negative integers, got: {index!r}")
    return indices


def _index_ok(index: int, allowed: Optional[FrozenSet[int]]) -> bool:
    return allowed is None or index in allowed


def _text_ok(value: str, constraint: Optional[TextOrPattern], case_sensitive: bool) -> bool:
    return constraint is None or constraint.is_match(value, case_sensitive)


@dataclass(frozen=True)
class ParamMatcher(Generic[TagT]):
    """Matches parameter arguments.

    Attributes:
        text: Constraint on the parameter text (None accepts any text).
        index: Parameter indices accepted (None accepts any index).
        tag: Opaque value copied onto every parameter this matcher resolves.
        name: Name used for lookup and diagnostics.
        help: Help text for the application's own use.
        arg_index: Absolute argument indices accepted (binary included).
    """

    text: Optional[TextOrPattern] = None
    index: Optional[FrozenSet[int]] = None
    tag: Optional[TagT] = None
    name: str = ""
    help: Optional[str] = None
    arg_index: Optional[FrozenSet[int]] = None

    kind: ClassVar[ArgKind] = ArgKind.PARAM

    def __post_init__(self):
        object.__setattr__(self, "text", TextOrPattern.coerce(self.text))
        object.__setattr__(self, "index", _normalise_indices(self.index))
        object.__setattr__(self, "arg_index", _normalise_indices(self.arg_index))

    def accepts(self, text: str, param_index: int, arg_index: int, case_sensitive: bool) -> bool:
        """Check whether this matcher is satisfied by a parameter."""
        return (
            _index_ok(arg_index, self.arg_index)
            and _index_ok(param_index, self.index)
            and _text_ok(text, self.text, case_sensitive)
        )

    def signature(self, case_sensitive: bool) -> Tuple:
        """Key shared by param matchers which accept exactly the same arguments."""
        text = self.text.signature(case_sensitive) if self.text is not None else None
        return (self.kind, self.index, self.arg_index, text)


@dataclass(frozen=True)
class OptionMatcher(Generic[TagT]):
    """Matches option arguments.

    Attributes:
        codes: Constraints on the option code; any may match (empty accepts any code).
        index: Option indices accepted (None accepts any index).
        value_policy: Whether the option takes a value.
        value_text: Constraint on the option value (None accepts any value).
        allow_value_announcer_start: The value may begin with an option
            announcer character (e.g. negative numbers with '-').
        tag: Opaque value copied onto every option this matcher resolves.
        name: Name used for lookup and diagnostics.
        help: Help text for the application's own use.
        arg_index: Absolute argument indices accepted (binary included).
    """

    codes: Tuple[TextOrPattern, ...] = ()
    index: Optional[FrozenSet[int]] = None
    value_policy: ValuePolicy = ValuePolicy.NONE
    value_text: Optional[TextOrPattern] = None
    allow_value_announcer_start: bool = False
    tag: Optional[TagT] = None
    name: str = ""
    help: Optional[str] = None
    arg_index: Optional[FrozenSet[int]] = None

    kind: ClassVar[ArgKind] = ArgKind.OPTION

    def __post_init__(self):
        codes = self.codes
        if codes is None:
            codes = ()
        elif isinstance(codes, (str, TextOrPattern)) or not isinstance(codes, Iterable):
            codes = (codes,)
        object.__setattr__(self, "codes", tuple(TextOrPattern(code) for code in codes))
        object.__setattr__(self, "index", _normalise_indices(self.index))
        object.__setattr__(self, "arg_index", _normalise_indices(self.arg_index))
        object.__setattr__(self, "value_policy", ValuePolicy(self.value_policy))
        object.__setattr__(self, "value_text", TextOrPattern.coerce(self.value_text))

    def accepts_code(self, code: str, option_index: int, arg_index: int, case_sensitive: bool) -> bool:
        """Check whether this matcher is satisfied by an option code at a position."""
        if not (_index_ok(arg_index, self.arg_index) and _index_ok(option_index, self.index)):
            return False
        if not self.codes:
            return True
        return any(constraint.is_match(code, case_sensitive) for constraint in self.codes)

    def accepts_value(self, value: str, case_sensitive: bool) -> bool:
        """Check an option value against the value-text constraint."""
        return _text_ok(value, self.value_text, case_sensitive)

    def signature(self, case_sensitive: bool) -> Tuple:
        """Key shared by option matchers which accept exactly the same option codes."""
        codes = frozenset(code.signature(case_sensitive) for code in self.codes)
        return (self.kind, self.index, self.arg_index, codes)


Matcher = Union[ParamMatcher, OptionMatcher]


class MatcherSet(Generic[TagT]):
    """Ordered collection of matchers.

    Registration order is significant: for each argument the first matcher
    satisfied wins.

    Example:
        >>> matchers = MatcherSet()
        >>> matchers.add_option_matcher("env", value_policy=ValuePolicy.IF_POSSIBLE, tag="env")
        >>> matchers.add_param_matcher(tag="word")
    """

    def __init__(self, matchers: Iterable[Matcher] = ()):
        self._matchers: List[Matcher] = []
        for matcher in matchers:
            self.add(matcher)

    def add(self, matcher: Matcher) -> Matcher:
        """Append a matcher to the end of the collection."""
        if not isinstance(matcher, (ParamMatcher, OptionMatcher)):
            raise TypeError(f"Expected a ParamMatcher or OptionMatcher, got: {type(matcher).__name__}")
        self._matchers.append(matcher)
        logger.debug(
            "matcher_registered",
            matcher_kind=matcher.kind.value,
            matcher_name=matcher.name,
            position=len(self._matchers) - 1,
        )
        return matcher

    def add_param_matcher(
        self,
        text_or_pattern: Optional[Constraint] = None,
        index: IndexConstraint = None,
        tag: Optional[TagT] = None,
        *,
        name: str = "",
        help: Optional[str] = None,
        arg_index: IndexConstraint = None,
    ) -> ParamMatcher:
        """Create and append a parameter matcher.

        Args:
            text_or_pattern: Text, pattern or predicate the parameter must match.
            index: Parameter index (or indices) accepted.
            tag: Value copied onto matched parameters.
            name: Matcher name.
            help: Help text.
            arg_index: Absolute argument index (or indices) accepted.

        Returns:
            The new matcher.
        """
        return self.add(
            ParamMatcher(
                text=text_or_pattern,
                index=index,
                tag=tag,
                name=name,
                help=help,
                arg_index=arg_index,
            )
        )

    def add_option_matcher(
        self,
        code_text_or_pattern: Union[Constraint, Iterable[Constraint], None] = None,
        index: IndexConstraint = None,
        value_policy: ValuePolicy = ValuePolicy.NONE,
        value_text_or_pattern: Optional[Constraint] = None,
        allow_value_announcer_start: bool = False,
        tag: Optional[TagT] = None,
        *,
        name: str = "",
        help: Optional[str] = None,
        arg_index: IndexConstraint = None,
    ) -> OptionMatcher:
        """Create and append an option matcher.

        Args:
            code_text_or_pattern: Code constraint, or several (any may match).
            index: Option index (or indices) accepted.
            value_policy: Whether the option takes a value.
            value_text_or_pattern: Constraint the value must match.
            allow_value_announcer_start: The value may begin with an option
                announcer character.
            tag: Value copied onto matched options.
            name: Matcher name.
            help: Help text.
            arg_index: Absolute argument index (or indices) accepted.

        Returns:
            The new matcher.
        """
        return self.add(
            OptionMatcher(
                codes=code_text_or_pattern,
                index=index,
                value_policy=value_policy,
                value_text=value_text_or_pattern,
                allow_value_announcer_start=allow_value_announcer_start,
                tag=tag,
                name=name,
                help=help,
                arg_index=arg_index,
            )
        )

    def find(self, name: str) -> Optional[Matcher]:
        """Return the first matcher with this name, if any."""
        return next((matcher for matcher in self._matchers if matcher.name == name), None)

    def remove(self, name: str) -> bool:
        """Remove the first matcher with this name.

        Returns:
            True if a matcher was removed.
        """
        for position, matcher in enumerate(self._matchers):
            if matcher.name == name:
                self.remove_at(position)
                return True
        return False

    def remove_at(self, position: int) -> Matcher:
        """Remove and return the matcher at a position."""
        matcher = self._matchers.pop(position)
        logger.debug(
            "matcher_removed",
            matcher_kind=matcher.kind.value,
            matcher_name=matcher.name,
            position=position,
        )
        return matcher

    def clear(self) -> None:
        self._matchers.clear()

    @property
    def param_matchers(self) -> Tuple[ParamMatcher, ...]:
        return tuple(m for m in self._matchers if isinstance(m, ParamMatcher))

    @property
    def option_matchers(self) -> Tuple[OptionMatcher, ...]:
        return tuple(m for m in self._matchers if isinstance(m, OptionMatcher))

    def snapshot(self) -> Tuple[Matcher, ...]:
        """Immutable copy of the current matchers, used for one parse."""
        return tuple(self._matchers)

    def __iter__(self) -> Iterator[Matcher]:
        return iter(tuple(self._matchers))

    def __len__(self) -> int:
        return len(self._matchers)

    def __getitem__(self, position: int) -> Matcher:
        return self._matchers[position]

    def __repr__(self) -> str:
        return f"MatcherSet({self._matchers!r})"
