from __future__ import annotations

import itertools
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Callable

logger = logging.getLogger(__name__)

Snapshot = list[dict[str, Any]]
SnapshotLoader = Callable[[str, str], Snapshot]
SnapshotCallback = Callable[[Snapshot], None]


@dataclass(frozen=True, slots=True)
class HubEvent:
    sequence: int
    timestamp: str
    event_type: str  # subscribe | unsubscribe | publish
    collection: str
    tenant_id: str
    subscription_id: int | None = None


class Subscription:
    """
    Handle for one live query. Release it with ``close()`` or by using it
    as a context manager; closing twice is a no-op.
    """

    def __init__(
        self,
        hub: LiveQueryHub,
        subscription_id: int,
        collection: str,
        tenant_id: str,
        callback: SnapshotCallback,
    ) -> None:
        self._hub = hub
        self.id = subscription_id
        self.collection = collection
        self.tenant_id = tenant_id
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def deliver(self, snapshot: Snapshot) -> None:
        if not self._active:
            return
        self._callback(snapshot)

    def close(self) -> None:
        if not self._active:
            return
        self._active = False
        self._hub._release(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "active" if self._active else "closed"
        return f"<Subscription {self.id} {self.collection}@{self.tenant_id} {state}>"


class LiveQueryHub:
    """
    Pushes the full result of a tenant scoped collection query to every
    subscriber whenever that collection changes for that tenant.
    """

    def __init__(self, loader: SnapshotLoader, *, history_size: int = 500) -> None:
        self._loader = loader
        self._ids = itertools.count(1)
        self._sequence = 0
        self._subscriptions: dict[tuple[str, str], dict[int, Subscription]] = {}
        self._history: deque[HubEvent] = deque(maxlen=history_size)
        self._lock = RLock()

    def subscribe(
        self,
        collection: str,
        tenant_id: str,
        callback: SnapshotCallback,
    ) -> Subscription:
        """
        Register ``callback`` and hand it the current snapshot right away.

        If the initial load fails the subscription is released before the
        error propagates.
        """
        with self._lock:
            subscription = Subscription(self, next(self._ids), collection, tenant_id, callback)
            self._subscriptions.setdefault((collection, tenant_id), {})[subscription.id] = subscription
            self._record("subscribe", collection, tenant_id, subscription.id)

        logger.debug("Opened %r", subscription)

        try:
            subscription.deliver(self._loader(collection, tenant_id))
        except Exception:
            subscription.close()
            raise

        return subscription

    def publish(self, collection: str, tenant_id: str) -> int:
        """
        Re-run the query for (collection, tenant_id) and fan the result out.
        Returns the number of subscribers notified.
        """
        with self._lock:
            subscribers = tuple(self._subscriptions.get((collection, tenant_id), {}).values())
            self._record("publish", collection, tenant_id)

        if not subscribers:
            return 0

        try:
            snapshot = self._loader(collection, tenant_id)
        except Exception:
            # The write already happened; subscribers catch up on the next change
            logger.exception("Could not refresh %s for site %s", collection, tenant_id)
            return 0

        for subscription in subscribers:
            try:
                subscription.deliver(list(snapshot))
            except Exception:
                logger.exception("Subscriber %r failed to take a snapshot", subscription)
                continue

        return len(subscribers)

    def active_count(self, collection: str | None = None, tenant_id: str | None = None) -> int:
        with self._lock:
            return sum(
                len(bucket)
                for (name, tenant), bucket in self._subscriptions.items()
                if (collection is None or name == collection)
                and (tenant_id is None or tenant == tenant_id)
            )

    def tail(self, *, limit: int = 100) -> tuple[HubEvent, ...]:
        safe_limit = max(1, int(limit))
        with self._lock:
            return tuple(self._history)[-safe_limit:]

    def _release(self, subscription: Subscription) -> None:
        key = (subscription.collection, subscription.tenant_id)
        with self._lock:
            bucket = self._subscriptions.get(key)
            if bucket is None or bucket.pop(subscription.id, None) is None:
                return
            if not bucket:
                del self._subscriptions[key]
            self._record("unsubscribe", subscription.collection, subscription.tenant_id, subscription.id)

        logger.debug("Closed %r", subscription)

    def _record(self, event_type: str, collection: str, tenant_id: str, subscription_id: int | None = None) -> None:
        self._sequence += 1
        self._history.append(
            HubEvent(
                sequence=self._sequence,
                timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
                event_type=event_type,
                collection=collection,
                tenant_id=tenant_id,
                subscription_id=subscription_id,
            )
        )
