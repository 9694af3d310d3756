from video_tracker.config.settings import Settings
from video_tracker.ledger.base import BaseLedgerClient
from video_tracker.ledger.example_client_adapter import ExampleLedgerClient
from video_tracker.ledger.web3_client_adapter import Web3LedgerClient


class LedgerClientFactory:
    """Creates the configured ledger client."""

    PROVIDERS = ("web3", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseLedgerClient:
        provider = settings.ledger_provider.lower()
        if provider == "example":
            return ExampleLedgerClient()
        if provider == "web3":
            return Web3LedgerClient(
                rpc_url=settings.ledger_rpc_url,
                contract_address=settings.ledger_contract_address,
                receipt_timeout_seconds=cls._receipt_timeout(settings),
            )
        raise ValueError(
            f"Unknown ledger provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @staticmethod
    def _receipt_timeout(settings: Settings) -> int:
        # Must expire before the submitter's overall ledger timeout.
        budget = min(settings.ledger_receipt_timeout_seconds, settings.ledger_timeout_seconds - 1)
        return max(1, budget)
