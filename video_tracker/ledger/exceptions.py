class LedgerError(Exception):
    """Base exception for ledger submission failures."""


class LedgerNotAuthorizedError(LedgerError):
    """Raised when no signer is connected; the remedy is connecting a wallet."""


class LedgerTransactionError(LedgerError):
    """Raised when the ledger rejects or reverts the transaction."""


class LedgerTransportError(LedgerError):
    """Raised when the ledger node cannot be reached or does not answer in time."""
