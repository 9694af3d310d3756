import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from web3.exceptions import ContractLogicError, TimeExhausted

from video_tracker.ledger.exceptions import LedgerTransactionError, LedgerTransportError
from video_tracker.ledger.web3_client_adapter import Web3LedgerClient

CONTRACT = "0x16726d44f6b1ed8145c407e2950e15e0a03b9ade"
ACCOUNT = "0x00000000000000000000000000000000000000aa"
TX_HASH = bytes.fromhex("12" * 32)


def _make_client(status: int = 1) -> tuple[Web3LedgerClient, MagicMock, MagicMock]:
    web3 = MagicMock()
    contract = web3.eth.contract.return_value
    contract.functions.uploadVideo.return_value.transact = AsyncMock(return_value=TX_HASH)
    web3.eth.wait_for_transaction_receipt = AsyncMock(
        return_value={"transactionHash": TX_HASH, "status": status}
    )
    client = Web3LedgerClient(
        rpc_url="http://node.test:8545",
        contract_address=CONTRACT,
        receipt_timeout_seconds=30,
        web3=web3,
    )
    return client, web3, contract


def _upload(client: Web3LedgerClient) -> str:
    return asyncio.run(
        client.upload_video(
            fingerprint="f" * 64,
            caption="cap",
            tag="tag",
            from_address=ACCOUNT,
        )
    )


class TestUploadVideo:
    def test_returns_hex_transaction_hash(self) -> None:
        client, web3, contract = _make_client()

        tx_id = _upload(client)

        assert tx_id == "0x" + "12" * 32
        contract.functions.uploadVideo.assert_called_once_with("f" * 64, "cap", "tag")
        contract.functions.uploadVideo.return_value.transact.assert_awaited_once_with(
            {"from": ACCOUNT}
        )
        web3.eth.wait_for_transaction_receipt.assert_awaited_once_with(TX_HASH, timeout=30)

    def test_binds_checksummed_contract_address(self) -> None:
        _client, web3, _contract = _make_client()

        kwargs = web3.eth.contract.call_args.kwargs
        assert kwargs["address"].lower() == CONTRACT
        assert kwargs["abi"][0]["name"] == "uploadVideo"

    def test_reverted_receipt_is_transaction_error(self) -> None:
        client, _web3, _contract = _make_client(status=0)

        with pytest.raises(LedgerTransactionError, match="reverted"):
            _upload(client)

    def test_contract_logic_error_is_transaction_error(self) -> None:
        client, _web3, contract = _make_client()
        contract.functions.uploadVideo.return_value.transact.side_effect = ContractLogicError(
            "execution reverted: already registered"
        )

        with pytest.raises(LedgerTransactionError, match="already registered"):
            _upload(client)

    def test_missing_receipt_is_transport_error(self) -> None:
        client, web3, _contract = _make_client()
        web3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("no receipt")

        with pytest.raises(LedgerTransportError, match="No receipt within 30s"):
            _upload(client)

    def test_unreachable_node_is_transport_error(self) -> None:
        client, _web3, contract = _make_client()
        contract.functions.uploadVideo.return_value.transact.side_effect = ConnectionError(
            "connection refused"
        )

        with pytest.raises(LedgerTransportError, match="unreachable"):
            _upload(client)


class TestConnectSigner:
    def test_uses_first_node_account(self) -> None:
        client, web3, _contract = _make_client()

        async def accounts() -> list[str]:
            return [ACCOUNT, "0x00000000000000000000000000000000000000bb"]

        web3.eth.accounts = accounts()

        signer = asyncio.run(client.connect_signer())

        assert signer.address == ACCOUNT
        assert signer.is_connected

    def test_no_accounts_gives_unconnected_signer(self) -> None:
        client, web3, _contract = _make_client()

        async def accounts() -> list[str]:
            return []

        web3.eth.accounts = accounts()

        assert not asyncio.run(client.connect_signer()).is_connected
