"""Port for the assisted bank statement parser."""

from dataclasses import dataclass
from typing import Protocol

from src.domain.models import Account, Category


@dataclass(frozen=True)
class TransactionCandidate:
    """Raw transaction proposed by a parser, before validation.

    Fields hold provider output as-is: dates and types are strings and the
    amount may be any numeric representation.
    """

    date: str
    amount: object
    type: str
    from_account_id: str
    notes: str = ""
    to_account_id: str | None = None
    category_id: str | None = None
    sub_category_id: str | None = None


class StatementParserPort(Protocol):
    """Port turning free-text statements into transaction candidates."""

    def parse_statement(
        self,
        text: str,
        accounts: list[Account],
        categories: list[Category],
    ) -> list[TransactionCandidate]:
        """Return the transactions found in a statement text."""


__all__ = ["TransactionCandidate", "StatementParserPort"]
