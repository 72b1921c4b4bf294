"""
Noospace feed controller - Core interaction logic.

This module sequences every user action:

    inscribe: Policy → Repository → Store → FeedState.append
    star:     Repository → Store → FeedState.replace
    delete:   Repository → Store → FeedState.remove
    load:     Repository → Store → FeedState.replace_all

Design principles:
- The controller owns its FeedState; there are no module-level singletons
- Validation failures never reach the store
- Store failures are logged and surfaced as a short message; no retries
- Feed state is patched only after the remote call has succeeded
"""

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional, Union

from noospace.config import STORE_BACKEND
from noospace.feed import FeedState
from noospace.models.entry import Entry, to_utc_iso
from noospace.policy import (
    DAILY_LIMIT,
    ValidationError,
    evaluate,
    normalize_symbol,
    normalize_tags,
    rituals_left,
    today_key,
)
from noospace.repository import EntryRepository
from noospace.storage import EntryStore, MockSupabaseStore, StoreError, SupabaseEntryStore
from noospace.views import VIEW_SCROLL, ListLayout, SpiralLayout, normalize_view, render

logger = logging.getLogger(__name__)


# =============================================================================
# User-facing store messages
# =============================================================================

MSG_FETCH_FAILED = "Could not fetch entries."
MSG_SAVE_FAILED = "Could not save entry."
MSG_UPDATE_FAILED = "Could not update entry."
MSG_DELETE_FAILED = "Could not delete entry."
MSG_IN_FLIGHT = "An inscription is already in flight."


# =============================================================================
# Result Data Structures
# =============================================================================

@dataclass
class ActionResult:
    """
    Result of one user action.

    Attributes:
        success: Whether the action completed and the feed was patched.
        entry: The entry affected, as returned by the store.
        error: User-facing message when the action failed.
        reason: Machine-readable failure kind: a validation reason,
            "store", "not found" or "in flight".
    """
    success: bool
    entry: Optional[Entry] = None
    error: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, entry: Entry = None) -> "ActionResult":
        return cls(success=True, entry=entry)

    @classmethod
    def failed(cls, error: str, reason: str) -> "ActionResult":
        return cls(success=False, error=error, reason=reason)


def new_wallet_token() -> str:
    """Random display-only wallet token: "0x" plus 16 lowercase hex digits."""
    return "0x" + secrets.token_hex(8)


def shorten_wallet(wallet: Optional[str]) -> Optional[str]:
    """Shortened wallet token for display, e.g. 0x1a2b…9f0e."""
    if not wallet:
        return None
    return f"{wallet[:6]}…{wallet[-4:]}"


def build_store(backend: str = None) -> EntryStore:
    """Get the configured store backend."""
    backend = (backend or STORE_BACKEND).lower()
    if backend == "memory":
        return MockSupabaseStore()
    return SupabaseEntryStore()


# =============================================================================
# Controller
# =============================================================================

class FeedController:
    """
    Top-level state container for one client session.

    Usage:
        controller = FeedController(EntryRepository(SupabaseEntryStore()))
        controller.load()
        result = controller.inscribe("hello", symbol="", tags="")
        if not result.success:
            print(result.error)
    """

    def __init__(
        self,
        repository: EntryRepository = None,
        state: FeedState = None,
        clock: Callable[[], datetime] = None,
    ):
        """
        Initialize the controller.

        Args:
            repository: Entry repository. Defaults to one over build_store().
            state: Feed state to own. Defaults to an empty FeedState.
            clock: Returns local "now"; used for the daily quota bucket.
        """
        self.repository = repository or EntryRepository(build_store())
        self.state = state or FeedState()
        self.clock = clock or datetime.now
        self.view: str = VIEW_SCROLL
        self.wallet: Optional[str] = None
        self.error: str = ""
        self._insert_lock = threading.Lock()

    # =========================================================================
    # Derived state
    # =========================================================================

    def today(self) -> str:
        return today_key(self.clock())

    @property
    def entries(self) -> List[Entry]:
        return self.state.entries

    @property
    def insert_in_flight(self) -> bool:
        return self._insert_lock.locked()

    @property
    def daily_limit(self) -> int:
        return DAILY_LIMIT

    def rituals_left(self) -> int:
        return rituals_left(self.state.entries, self.today())

    def visible_entries(self) -> List[Entry]:
        return self.state.filtered()

    def all_tags(self) -> List[str]:
        return self.state.all_tags()

    def layout(self, view: str = None) -> Union[ListLayout, SpiralLayout]:
        """Render the filtered entries with the given or current view."""
        return render(view or self.view, self.visible_entries())

    @property
    def wallet_display(self) -> Optional[str]:
        return shorten_wallet(self.wallet)

    # =========================================================================
    # Local actions
    # =========================================================================

    def set_filter(self, tag: Optional[str]) -> None:
        self.state.set_filter(tag)

    def set_view(self, view: str) -> str:
        self.view = normalize_view(view)
        return self.view

    def connect_wallet(self) -> str:
        """
        Set a random display token.

        Purely cosmetic: nothing is signed, verified or sent anywhere
        except as the wallet column of later inscriptions.
        """
        self.wallet = new_wallet_token()
        logger.debug("Wallet token set: %s", self.wallet_display)
        return self.wallet

    # =========================================================================
    # Store-backed actions
    # =========================================================================

    def load(self) -> ActionResult:
        """Replace the feed with a full fetch. On failure the previous feed is kept."""
        try:
            entries = self.repository.list_all()
        except StoreError:
            self.error = MSG_FETCH_FAILED
            return ActionResult.failed(MSG_FETCH_FAILED, "store")

        self.state.replace_all(entries)
        self.error = ""
        return ActionResult.ok()

    def validate(self, text: str) -> str:
        """
        Check a candidate text against the policy.

        Returns:
            The trimmed text.

        Raises:
            ValidationError: When the policy rejects the candidate.
        """
        decision = evaluate(self.state.entries, text, self.today())
        if not decision.accepted:
            raise ValidationError.from_decision(decision)
        return text.strip()

    def inscribe(
        self,
        text: str,
        symbol: str = "",
        tags: str = "",
        wallet: Optional[str] = None,
    ) -> ActionResult:
        """
        Validate and persist a new entry, then append it to the feed.

        Tags and symbol are normalized before validation. The guard is held
        from validation until the entry is appended, so a second call made
        meanwhile (same thread or another) is rejected without contacting
        the store.

        Args:
            wallet: Token for this inscription; defaults to the controller's own.
        """
        self.error = ""

        if not self._insert_lock.acquire(blocking=False):
            self.error = MSG_IN_FLIGHT
            return ActionResult.failed(MSG_IN_FLIGHT, "in flight")

        try:
            return self._inscribe_locked(text, symbol, tags, wallet or self.wallet)
        finally:
            self._insert_lock.release()

    def _inscribe_locked(self, text, symbol, tags, wallet) -> ActionResult:
        normalized_tags = normalize_tags(tags)
        normalized_symbol = normalize_symbol(symbol)

        try:
            trimmed = self.validate(text)
        except ValidationError as e:
            self.error = e.message
            return ActionResult.failed(e.message, e.reason)

        entry = Entry(
            text=trimmed,
            symbol=normalized_symbol,
            tags=normalized_tags,
            wallet=wallet,
            date=to_utc_iso(self.clock()),
            stars=0,
        )

        try:
            saved = self.repository.insert(entry)
        except StoreError:
            self.error = MSG_SAVE_FAILED
            return ActionResult.failed(MSG_SAVE_FAILED, "store")

        self.state.append(saved)
        return ActionResult.ok(saved)

    def star(self, entry_id: Any) -> ActionResult:
        """
        Add one star using the count currently held in the feed.

        The write is stars + 1 from this client's snapshot, so concurrent
        starring from another client can be lost.
        """
        self.error = ""
        current = self.state.get(entry_id)
        if current is None:
            self.error = MSG_UPDATE_FAILED
            return ActionResult.failed(MSG_UPDATE_FAILED, "not found")

        try:
            updated = self.repository.increment_stars(current)
        except StoreError:
            self.error = MSG_UPDATE_FAILED
            return ActionResult.failed(MSG_UPDATE_FAILED, "store")

        self.state.replace(updated)
        return ActionResult.ok(updated)

    def delete(self, entry_id: Any) -> ActionResult:
        """Delete an entry remotely, then drop it from the feed."""
        self.error = ""
        current = self.state.get(entry_id)

        try:
            self.repository.delete_by_id(current.id if current is not None else entry_id)
        except StoreError:
            self.error = MSG_DELETE_FAILED
            return ActionResult.failed(MSG_DELETE_FAILED, "store")

        self.state.remove(entry_id)
        return ActionResult.ok(current)

    def __repr__(self) -> str:
        return f"<FeedController state={self.state!r} view={self.view!r}>"
