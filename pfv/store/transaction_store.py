"""In-memory transaction ledger persisted to a blob store.

The store owns the ordered transaction sequence (newest first). Every
successful mutation rewrites the whole ledger under a single key and then
notifies subscribers with the new snapshot.
"""

import time
from collections.abc import Callable, Iterator

from pfv.domain.models import TransactionId
from pfv.domain.transactions import (
    MalformedLedgerError,
    Transaction,
    build_transaction,
    deserialize_transactions,
    parse_transaction_input,
    serialize_transactions,
)
from pfv.logging_setup import get_logger
from pfv.store.blob import BlobStore, BlobStoreError

DEFAULT_KEY = "transactions"

Snapshot = tuple[Transaction, ...]
Subscriber = Callable[[Snapshot], None]

logger = get_logger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TransactionStore:
    """Ordered, uniquely identified transaction ledger.

    Args:
        blob_store: Persistence port holding the serialized ledger.
        key: Blob key the ledger lives under.
        clock: Millisecond clock used to mint ids.
        autoload: Load the persisted ledger on construction.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        key: str = DEFAULT_KEY,
        clock: Callable[[], int] = _now_ms,
        autoload: bool = True,
    ) -> None:
        self._blob_store = blob_store
        self._key = key
        self._clock = clock
        self._transactions: list[Transaction] = []
        self._last_issued: int | None = None
        self._subscribers: list[Subscriber] = []

        if autoload:
            self.load()

    @property
    def key(self) -> str:
        return self._key

    @property
    def transactions(self) -> Snapshot:
        """Current snapshot, newest first."""
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def __contains__(self, txn_id: object) -> bool:
        return any(txn.id == txn_id for txn in self._transactions)

    def get(self, txn_id: str) -> Transaction | None:
        for txn in self._transactions:
            if txn.id == txn_id:
                return txn
        return None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for new snapshots.

        Args:
            callback: Called with the snapshot after every load and successful mutation.

        Returns:
            Function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def load(self) -> None:
        """Replace the in-memory ledger with the persisted one.

        Never raises: an absent, unreadable or malformed ledger loads as empty.
        Nothing is written back.
        """
        try:
            payload = self._blob_store.get(self._key)
        except BlobStoreError as e:
            logger.warning("Could not read ledger, starting empty: %s", e)
            payload = None

        transactions: list[Transaction] = []
        if payload is not None:
            try:
                transactions = deserialize_transactions(payload)
            except MalformedLedgerError as e:
                logger.warning("Persisted ledger under '%s' is malformed, starting empty: %s", self._key, e)

        self._transactions = transactions
        self._last_issued = None
        logger.debug("Loaded %d transactions from '%s'", len(transactions), self._key)
        self._notify()

    def add(self, amount_raw: str, date_raw: str, description_raw: str) -> Transaction | None:
        """Record a new transaction at the head of the ledger.

        Invalid input (an empty field, or an amount that is not a finite
        number) is rejected silently: nothing changes and nothing is persisted.

        Args:
            amount_raw: Raw amount string.
            date_raw: ISO-8601 date string, stored as given.
            description_raw: Description text.

        Returns:
            The new transaction, or None if the input was rejected.
        """
        parsed = parse_transaction_input(amount_raw, date_raw, description_raw)
        if parsed is None:
            logger.debug("Rejected transaction input: amount=%r date=%r", amount_raw, date_raw)
            return None

        txn = build_transaction(self._next_id(), parsed)
        self._transactions.insert(0, txn)
        logger.debug("Added transaction %s", txn.id)

        self.persist()
        self._notify()
        return txn

    def delete(self, txn_id: str) -> bool:
        """Remove a transaction by id.

        Deleting an id that is not present is a no-op and persists nothing.

        Args:
            txn_id: Transaction id.

        Returns:
            True if a transaction was removed.
        """
        remaining = [txn for txn in self._transactions if txn.id != txn_id]
        if len(remaining) == len(self._transactions):
            return False

        self._transactions = remaining
        logger.debug("Deleted transaction %s", txn_id)

        self.persist()
        self._notify()
        return True

    def persist(self) -> None:
        """Overwrite the persisted ledger with the current snapshot.

        Write failures are logged and swallowed; the in-memory ledger stays
        authoritative for the rest of the process.
        """
        try:
            self._blob_store.set(self._key, serialize_transactions(self._transactions))
        except BlobStoreError as e:
            logger.warning("Could not persist %d transactions: %s", len(self._transactions), e)

    def _next_id(self) -> TransactionId:
        candidate = int(self._clock())
        if self._last_issued is not None and candidate <= self._last_issued:
            candidate = self._last_issued + 1

        existing = {txn.id for txn in self._transactions}
        while str(candidate) in existing:
            candidate += 1

        self._last_issued = candidate
        return TransactionId(str(candidate))

    def _notify(self) -> None:
        snapshot = self.transactions
        for callback in list(self._subscribers):
            callback(snapshot)
