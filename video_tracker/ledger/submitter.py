import asyncio

from video_tracker.ledger.base import BaseLedgerClient
from video_tracker.ledger.exceptions import LedgerNotAuthorizedError, LedgerTransportError
from video_tracker.logging.logger import Log
from video_tracker.workflow.models import LedgerReceipt, SignerIdentity


class LedgerSubmitter:
    """Writes a video fingerprint to the ledger on behalf of an explicit signer.

    One call is one transaction. Nothing here retries: a second write must be
    a new user action, otherwise the same video could land on-chain twice.
    """

    def __init__(self, client: BaseLedgerClient, timeout_seconds: int) -> None:
        self._client = client
        self._timeout_seconds = timeout_seconds

    async def connect_signer(self) -> SignerIdentity:
        signer = await self._client.connect_signer()
        Log.info(f"Signer connected: {signer.address or '<none>'}")
        return signer

    async def submit(
        self,
        fingerprint: str,
        caption: str,
        tag: str,
        signer: SignerIdentity,
    ) -> LedgerReceipt:
        """Submit one ledger write and return its receipt.

        Raises:
            LedgerNotAuthorizedError: if the signer is not connected.
            LedgerTransactionError: if the ledger rejects the transaction.
            LedgerTransportError: on network failure or timeout.
        """
        if not signer.is_connected or signer.address is None:
            raise LedgerNotAuthorizedError(
                "Connect a wallet to interact with the blockchain."
            )

        Log.info(f"Submitting video {fingerprint[:12]} to ledger from {signer.address}")
        try:
            transaction_id = await asyncio.wait_for(
                self._client.upload_video(
                    fingerprint=fingerprint,
                    caption=caption,
                    tag=tag,
                    from_address=signer.address,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise LedgerTransportError(
                f"Ledger did not confirm within {self._timeout_seconds}s"
            ) from exc

        Log.info(f"Ledger transaction confirmed: {transaction_id}")
        return LedgerReceipt(transaction_id=transaction_id, submitter_address=signer.address)
