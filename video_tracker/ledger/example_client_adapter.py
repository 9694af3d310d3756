"""In-memory ledger adapter for local development and tests."""

import hashlib

from video_tracker.ledger.base import BaseLedgerClient
from video_tracker.workflow.models import SignerIdentity


class ExampleLedgerClient(BaseLedgerClient):
    """Keeps written entries in a list and derives transaction ids from them."""

    DEFAULT_ACCOUNT = "0x00000000000000000000000000000000000000aa"

    def __init__(self, account: str | None = DEFAULT_ACCOUNT) -> None:
        self._account = account
        self.entries: list[dict[str, str]] = []

    async def connect_signer(self) -> SignerIdentity:
        return SignerIdentity(address=self._account)

    async def upload_video(
        self,
        *,
        fingerprint: str,
        caption: str,
        tag: str,
        from_address: str,
    ) -> str:
        self.entries.append(
            {
                "fingerprint": fingerprint,
                "caption": caption,
                "tag": tag,
                "from": from_address,
            }
        )
        seed = f"{len(self.entries)}:{from_address}:{fingerprint}".encode()
        return "0x" + hashlib.sha256(seed).hexdigest()
