"""Application ports package."""

from .alert_provider import AlertCandidate, AlertProviderPort
from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort
from .statement_parser import StatementParserPort, TransactionCandidate

__all__ = [
    "AlertCandidate",
    "AlertProviderPort",
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "StatementParserPort",
    "TransactionCandidate",
]
