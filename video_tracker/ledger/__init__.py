from video_tracker.ledger.base import BaseLedgerClient
from video_tracker.ledger.factory import LedgerClientFactory
from video_tracker.ledger.submitter import LedgerSubmitter

__all__ = ["BaseLedgerClient", "LedgerClientFactory", "LedgerSubmitter"]
