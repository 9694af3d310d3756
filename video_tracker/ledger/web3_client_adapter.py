import asyncio
from typing import Any

from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from video_tracker.ledger.base import BaseLedgerClient
from video_tracker.ledger.exceptions import LedgerTransactionError, LedgerTransportError
from video_tracker.logging.logger import Log
from video_tracker.workflow.models import SignerIdentity

VIDEO_REGISTRY_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "uploadVideo",
        "stateMutability": "nonpayable",
        "inputs": [
            {"internalType": "string", "name": "videoHash", "type": "string"},
            {"internalType": "string", "name": "caption", "type": "string"},
            {"internalType": "string", "name": "tag", "type": "string"},
        ],
        "outputs": [],
    },
]


class Web3LedgerClient(BaseLedgerClient):
    """Ledger client for the video registry contract on an EVM node."""

    def __init__(
        self,
        *,
        rpc_url: str,
        contract_address: str,
        receipt_timeout_seconds: int,
        web3: AsyncWeb3 | None = None,
    ) -> None:
        self._web3 = web3 if web3 is not None else AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self._receipt_timeout_seconds = receipt_timeout_seconds
        self._contract = self._web3.eth.contract(
            address=AsyncWeb3.to_checksum_address(contract_address),
            abi=VIDEO_REGISTRY_ABI,
        )

    async def connect_signer(self) -> SignerIdentity:
        try:
            accounts = await self._web3.eth.accounts
        except (Web3Exception, OSError) as exc:
            raise LedgerTransportError(f"Cannot list node accounts: {exc}") from exc
        if not accounts:
            Log.warning("Ledger node exposes no accounts; signer not connected")
            return SignerIdentity()
        return SignerIdentity(address=str(accounts[0]))

    async def upload_video(
        self,
        *,
        fingerprint: str,
        caption: str,
        tag: str,
        from_address: str,
    ) -> str:
        call = self._contract.functions.uploadVideo(fingerprint, caption, tag)
        try:
            tx_hash = await call.transact({"from": from_address})
            receipt = await self._web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self._receipt_timeout_seconds
            )
        except ContractLogicError as exc:
            raise LedgerTransactionError(f"Transaction reverted: {exc}") from exc
        except TimeExhausted as exc:
            raise LedgerTransportError(f"No receipt within {self._receipt_timeout_seconds}s: {exc}") from exc
        except (Web3Exception, ValueError) as exc:
            raise LedgerTransactionError(f"Transaction rejected: {exc}") from exc
        except (OSError, asyncio.TimeoutError) as exc:
            raise LedgerTransportError(f"Ledger node unreachable: {exc}") from exc

        transaction_id = AsyncWeb3.to_hex(receipt["transactionHash"])
        if receipt["status"] == 0:
            raise LedgerTransactionError(f"Transaction {transaction_id} reverted")
        return transaction_id
