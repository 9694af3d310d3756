from abc import ABC, abstractmethod

from video_tracker.workflow.models import SignerIdentity


class BaseLedgerClient(ABC):
    """Contract for provider-specific ledger clients."""

    @abstractmethod
    async def connect_signer(self) -> SignerIdentity:
        """Return the account that will sign transactions.

        An unconnected SignerIdentity is returned when the provider exposes
        no account.
        """

    @abstractmethod
    async def upload_video(
        self,
        *,
        fingerprint: str,
        caption: str,
        tag: str,
        from_address: str,
    ) -> str:
        """Write one video entry to the ledger and return the transaction id.

        Raises:
            LedgerTransactionError: if the transaction is rejected or reverted.
            LedgerTransportError: if the node cannot be reached.
        """
