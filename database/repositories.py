"""State repository: the single owner of the in-memory application state."""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from core import get_logger, StampCard
from core.exceptions import PrizeNotFoundError, StampLimitError, UserNotFoundError
from database.json_store import PersistentStore
from database.models import AdminCredentials, AppState, Prize, PushSubscription, User

logger = get_logger(__name__)


@dataclass(frozen=True)
class StampResult:
    stamps: int
    prize: Optional[str]


class IdGenerator:
    """Time-derived ids that stay unique within the process.

    Ids are milliseconds since the epoch; a second request in the same
    millisecond gets the next integer instead of a duplicate.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def seed(self, existing: Iterable[str]) -> None:
        """Never hand out an id at or below one already stored."""
        for value in existing:
            try:
                self._last = max(self._last, int(value))
            except ValueError:
                continue

    def __call__(self) -> str:
        with self._lock:
            now = int(self._clock() * 1000)
            self._last = max(now, self._last + 1)
            return str(self._last)


class StateRepository:
    """Holds the process-wide :class:`AppState` and encodes the card rules.

    Every mutating operation saves the full state through the
    :class:`PersistentStore` before it returns. Operations are serialised
    with a lock so each read-modify-save runs to completion.
    """

    def __init__(
        self,
        store: PersistentStore,
        rng: Optional[random.Random] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._store = store
        self._state: AppState = store.load()
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        if id_factory is None:
            id_factory = IdGenerator()
            id_factory.seed(
                [user.id for user in self._state.users]
                + [prize.id for prize in self._state.prizes]
            )
        self._next_id = id_factory

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _save(self) -> None:
        # A failed write is already logged by the store; memory stays authoritative
        self._store.save(self._state)

    def _get_user(self, user_id: str) -> User:
        for user in self._state.users:
            if user.id == user_id:
                return user
        raise UserNotFoundError(user_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def admin(self) -> AdminCredentials:
        with self._lock:
            return AdminCredentials(self._state.admin.username, self._state.admin.password)

    def snapshot(self) -> dict:
        """Serializable copy of the whole state."""
        with self._lock:
            return self._state.to_dict()

    def get_user(self, user_id: str) -> User:
        with self._lock:
            user = self._get_user(user_id)
            return User(**user.to_dict())

    def _find_by_endpoint_or_phone(
        self, endpoint: Optional[str], phone: Optional[str]
    ) -> Optional[User]:
        if endpoint:
            for user in self._state.users:
                if user.endpoint == endpoint:
                    return user
        if phone:
            for user in self._state.users:
                if user.phone == phone:
                    return user
        return None

    def find_user_by_endpoint_or_phone(
        self, endpoint: Optional[str], phone: Optional[str]
    ) -> Optional[User]:
        """Match an existing user by push endpoint first, then by phone."""
        with self._lock:
            user = self._find_by_endpoint_or_phone(endpoint, phone)
            return User(**user.to_dict()) if user else None

    def list_prizes(self) -> List[Prize]:
        with self._lock:
            return [Prize(p.id, p.name, p.redeemed) for p in self._state.prizes]

    def list_active_users(self) -> List[dict]:
        """Users holding a usable push subscription, in the client-list shape."""
        with self._lock:
            return [user.summary() for user in self._state.users if user.is_active]

    def users_for_push(self, ids) -> List[User]:
        """Select push recipients.

        Args:
            ids: ``"all"`` or a list of user ids; anything else selects nobody
        """
        with self._lock:
            active = [user for user in self._state.users if user.is_active]
            if ids == "all":
                selected = active
            elif isinstance(ids, list):
                wanted = {str(value) for value in ids}
                selected = [user for user in active if user.id in wanted]
            else:
                selected = []
            return [User(**user.to_dict()) for user in selected]

    def counts(self) -> dict:
        with self._lock:
            return {
                "users": len(self._state.users),
                "active_users": sum(1 for user in self._state.users if user.is_active),
                "prizes": len(self._state.prizes),
            }

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def upsert_subscription(
        self, name: str, phone: str, subscription: PushSubscription
    ) -> Tuple[User, bool]:
        """Register or refresh a subscription.

        An existing user (same endpoint, else same phone) gets the new name,
        phone and subscription and keeps its stamps. Otherwise a user with
        zero stamps is created.

        Returns:
            The stored user and whether it was created
        """
        with self._lock:
            user = self._find_by_endpoint_or_phone(subscription.get("endpoint"), phone)
            is_new = user is None
            if is_new:
                user = User(
                    id=self._next_id(),
                    name=name,
                    phone=phone,
                    subscription=subscription,
                    stamps=0,
                )
                self._state.users.append(user)
                logger.info(f"New subscriber {user.id} ({name})")
            else:
                user.name = name
                user.phone = phone
                user.subscription = subscription
            self._save()
            return User(**user.to_dict()), is_new

    def register_user(self, name: str) -> Tuple[User, bool]:
        """Register a bare user by name; an existing name is left untouched."""
        with self._lock:
            for user in self._state.users:
                if user.name == name:
                    return User(**user.to_dict()), False
            user = User(id=self._next_id(), name=name, phone="")
            self._state.users.append(user)
            self._save()
            logger.info(f"Registered user {user.id} ({name})")
            return User(**user.to_dict()), True

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            user = self._get_user(user_id)
            self._state.users.remove(user)
            self._save()
            logger.info(f"Deleted user {user_id}")

    # ------------------------------------------------------------------
    # Card
    # ------------------------------------------------------------------

    def add_stamp(self, user_id: str) -> StampResult:
        """Add one stamp to a card.

        Reaching the last stamp assigns a random unredeemed prize when the user
        has none. The prize is not flagged as redeemed, so it stays in the pool
        and may be assigned to other users too.

        Raises:
            UserNotFoundError: unknown user
            StampLimitError: the card is already full
        """
        with self._lock:
            user = self._get_user(user_id)
            if user.stamps >= StampCard.MAX_STAMPS:
                raise StampLimitError(user_id)
            user.stamps += 1
            if user.stamps >= StampCard.MAX_STAMPS and not user.prize:
                available = [prize for prize in self._state.prizes if not prize.redeemed]
                if available:
                    user.prize = self._rng.choice(available).id
                    logger.info(f"User {user_id} completed the card, prize {user.prize}")
                else:
                    logger.info(f"User {user_id} completed the card, no prize available")
            self._save()
            return StampResult(user.stamps, user.prize)

    def redeem_card(self, user_id: str) -> None:
        """Reset a card to zero stamps and clear its prize.

        The prize's own ``redeemed`` flag is left untouched.
        """
        with self._lock:
            user = self._get_user(user_id)
            user.stamps = 0
            user.prize = None
            self._save()
            logger.info(f"Card of user {user_id} redeemed")

    # ------------------------------------------------------------------
    # Prizes
    # ------------------------------------------------------------------

    def create_prize(self, name: str) -> str:
        with self._lock:
            prize = Prize(id=self._next_id(), name=name, redeemed=False)
            self._state.prizes.append(prize)
            self._save()
            logger.info(f"Created prize {prize.id} ({name})")
            return prize.id

    def delete_prize(self, prize_id: str) -> None:
        """Remove a prize. Users already holding its id keep the reference."""
        with self._lock:
            for prize in self._state.prizes:
                if prize.id == prize_id:
                    self._state.prizes.remove(prize)
                    break
            else:
                raise PrizeNotFoundError(prize_id)
            self._save()
            logger.info(f"Deleted prize {prize_id}")
