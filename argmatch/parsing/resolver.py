"""Matcher resolution.

Turns RawTokens into tagged arguments. Each token is classified as the
binary, a parameter or an option, and the first registered matcher of that
kind which is satisfied by the token decides its tag (and, for options,
whether a value is taken).
"""

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from argmatch.logging import get_module_logger
from argmatch.parsing.errors import ErrorReporter, ParseErrorKind
from argmatch.parsing.matchers import Matcher, OptionMatcher, ParamMatcher
from argmatch.parsing.models import (
    Arg,
    BinaryArg,
    OptionArg,
    ParamArg,
    RawToken,
    ValuePolicy,
)
from argmatch.parsing.style import StyleConfig

logger = get_module_logger()


class Resolver:
    """Resolves RawTokens against an ordered set of matchers.

    Resolution rules:
    - With ``first_arg_is_binary`` the first token is the binary; no matcher
      is consulted.
    - Option-like tokens are matched against option matchers by code,
      option index and argument index; the winning matcher's value policy
      decides whether an inline or following value is taken.
    - All other tokens are matched against param matchers by text,
      parameter index and argument index.
    - When no matcher of a kind is registered every token of that kind is
      accepted with a ``None`` tag.

    Resolution stops at the first error.
    """

    def __init__(self, style: Optional[StyleConfig] = None, reporter: Optional[ErrorReporter] = None):
        self.style = style or StyleConfig()
        self.reporter = reporter or ErrorReporter()

    def resolve(
        self,
        tokens: Sequence[RawToken],
        matchers: Iterable[Matcher],
        end_offset: Optional[int] = None,
    ) -> List[Arg]:
        """Resolve tokens into arguments.

        Args:
            tokens: Tokens produced by the lexer (or pre-split arguments).
            matchers: Matchers in registration order.
            end_offset: Offset reported for errors at end of input. Defaults
                to the end of the last token.

        Returns:
            The resolved arguments, one per argument (an option and the
            following token it takes as value form a single argument).

        Raises:
            ParseError: UNMATCHED_TOKEN, AMBIGUOUS_MATCH,
                MISSING_REQUIRED_VALUE or UNEXPECTED_ANNOUNCER.
        """
        return _Resolution(self, tokens, tuple(matchers), end_offset).run()


class _Resolution:
    """State for resolving one token sequence."""

    def __init__(
        self,
        resolver: Resolver,
        tokens: Sequence[RawToken],
        matchers: Tuple[Matcher, ...],
        end_offset: Optional[int],
    ):
        self.style = resolver.style
        self.reporter = resolver.reporter
        self.tokens = tokens
        self.param_matchers = [m for m in matchers if isinstance(m, ParamMatcher)]
        self.option_matchers = [m for m in matchers if isinstance(m, OptionMatcher)]
        if end_offset is None:
            end_offset = tokens[-1].end if tokens else 0
        self.end_offset = end_offset
        self.args: List[Arg] = []
        self.param_index = 0
        self.option_index = 0
        self._checked: Set[int] = set()

    def run(self) -> List[Arg]:
        position = 0
        while position < len(self.tokens):
            token = self.tokens[position]
            if position == 0 and self.style.first_arg_is_binary:
                self.args.append(
                    BinaryArg(
                        path=token.text,
                        arg_index=0,
                        offset=token.start,
                        source_index=token.source_index,
                    )
                )
                position += 1
            elif token.announced:
                position += self._resolve_option(position, token)
            else:
                self._resolve_param(token)
                position += 1

        logger.debug(
            "arguments_resolved",
            arg_count=len(self.args),
            param_count=self.param_index,
            option_count=self.option_index,
        )
        return self.args

    def _fail(self, kind: ParseErrorKind, offset: int, text: str, **indices):
        return self.reporter.error(
            kind,
            offset,
            text,
            arg_index=len(self.args),
            partial=self.args,
            **indices,
        )

    def _check_ambiguity(
        self,
        winner: Matcher,
        candidates: List,
        token: RawToken,
        case_sensitive: bool,
        **indices,
    ) -> None:
        """Reject a later matcher identical to the winner, once per winner."""
        if id(winner) in self._checked:
            return
        self._checked.add(id(winner))

        signature = winner.signature(case_sensitive)
        position = next(i for i, candidate in enumerate(candidates) if candidate is winner)
        later = candidates[position + 1 :]
        if any(other.signature(case_sensitive) == signature for other in later):
            raise self._fail(ParseErrorKind.AMBIGUOUS_MATCH, token.start, token.text, **indices)

    def _resolve_param(self, token: RawToken) -> None:
        case_sensitive = self.style.effective_params_case_sensitive
        arg_index = len(self.args)
        matcher: Optional[ParamMatcher] = None

        if self.param_matchers:
            matcher = next(
                (
                    m
                    for m in self.param_matchers
                    if m.accepts(token.text, self.param_index, arg_index, case_sensitive)
                ),
                None,
            )
            if matcher is None:
                raise self._fail(
                    ParseErrorKind.UNMATCHED_TOKEN,
                    token.start,
                    token.text,
                    param_index=self.param_index,
                )
            self._check_ambiguity(
                matcher,
                self.param_matchers,
                token,
                case_sensitive,
                param_index=self.param_index,
            )

        self.args.append(
            ParamArg(
                index=self.param_index,
                text=token.text,
                tag=matcher.tag if matcher is not None else None,
                arg_index=arg_index,
                offset=token.start,
                source_index=token.source_index,
                matcher=matcher,
            )
        )
        self.param_index += 1

    def _resolve_option(self, position: int, token: RawToken) -> int:
        """Resolve an option token.

        Returns:
            Number of tokens consumed (2 when the following token is the value).
        """
        case_sensitive = self.style.effective_option_codes_case_sensitive
        arg_index = len(self.args)
        matcher: Optional[OptionMatcher] = None

        if self.option_matchers:
            matcher = next(
                (
                    m
                    for m in self.option_matchers
                    if m.accepts_code(token.code, self.option_index, arg_index, case_sensitive)
                ),
                None,
            )
            if matcher is None:
                raise self._fail(
                    ParseErrorKind.UNMATCHED_TOKEN,
                    token.start,
                    token.text,
                    option_index=self.option_index,
                )
            self._check_ambiguity(
                matcher,
                self.option_matchers,
                token,
                case_sensitive,
                option_index=self.option_index,
            )

        following = self.tokens[position + 1] if position + 1 < len(self.tokens) else None
        value, consumed = self._option_value(token, matcher, following)

        self.args.append(
            OptionArg(
                index=self.option_index,
                code=token.code,
                value=value,
                tag=matcher.tag if matcher is not None else None,
                arg_index=arg_index,
                offset=token.start,
                source_index=token.source_index,
                matcher=matcher,
            )
        )
        self.option_index += 1
        return 1 + consumed

    def _option_value(
        self,
        token: RawToken,
        matcher: Optional[OptionMatcher],
        following: Optional[RawToken],
    ) -> Tuple[Optional[str], int]:
        """Apply the matcher's value policy.

        Returns:
            The value (or None) and the number of following tokens consumed.
        """
        policy = matcher.value_policy if matcher is not None else ValuePolicy.NONE
        case_sensitive = self.style.effective_option_values_case_sensitive

        if token.has_inline_value:
            if policy != ValuePolicy.NONE:
                self._check_value(
                    matcher,
                    token.value,
                    token.value_leading_announcer,
                    token.value_start,
                    case_sensitive,
                )
            return token.value, 0

        if policy == ValuePolicy.NONE:
            return None, 0

        if not self.style.space_announces_value:
            following = None

        if policy == ValuePolicy.IF_POSSIBLE:
            if (
                following is not None
                and (not following.leading_announcer or matcher.allow_value_announcer_start)
                and matcher.accepts_value(following.text, case_sensitive)
            ):
                return following.text, 1
            return None, 0

        if following is None:
            offset = self.end_offset if self.style.space_announces_value else token.end
            raise self._fail(
                ParseErrorKind.MISSING_REQUIRED_VALUE,
                offset,
                token.text,
                option_index=self.option_index,
            )
        self._check_value(
            matcher,
            following.text,
            following.leading_announcer,
            following.start,
            case_sensitive,
        )
        return following.text, 1

    def _check_value(
        self,
        matcher: OptionMatcher,
        value: str,
        starts_with_announcer: bool,
        offset: int,
        case_sensitive: bool,
    ) -> None:
        if starts_with_announcer and not matcher.allow_value_announcer_start:
            raise self._fail(
                ParseErrorKind.UNEXPECTED_ANNOUNCER,
                offset,
                value,
                option_index=self.option_index,
            )
        if not matcher.accepts_value(value, case_sensitive):
            raise self._fail(
                ParseErrorKind.UNMATCHED_TOKEN,
                offset,
                value,
                option_index=self.option_index,
            )
