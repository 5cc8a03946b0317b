"""Parse result dataclass.

Errors-as-values alternative to catching ParseError, returned by the
parser's ``try_parse_*`` methods.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from argmatch.parsing.errors import ParseError
from argmatch.parsing.models import Arg


class ParseStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ParseResult:
    """Outcome of a parse.

    Attributes:
        status: ParseStatus -- SUCCESS or FAILED
        args: List[Arg] -- resolved arguments (those resolved before the
            failure when status is FAILED)
        error: Optional[ParseError] -- the error when status is FAILED
    """

    status: ParseStatus
    args: List[Arg] = field(default_factory=list)
    error: Optional[ParseError] = None

    @property
    def is_success(self) -> bool:
        """Helper property to check if the parse succeeded.

        Returns:
            True if status is SUCCESS, False otherwise
        """
        return self.status == ParseStatus.SUCCESS

    @classmethod
    def success(cls, args: List[Arg]) -> "ParseResult":
        """Create a SUCCESS ParseResult holding the resolved arguments."""
        return cls(status=ParseStatus.SUCCESS, args=list(args))

    @classmethod
    def failure(cls, error: ParseError) -> "ParseResult":
        """Create a FAILED ParseResult.

        Args:
            error: The error which stopped the parse

        Returns:
            ParseResult with FAILED status and the partial arguments
        """
        return cls(status=ParseStatus.FAILED, args=list(error.partial), error=error)
