from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Mapping
from urllib.parse import urlencode

from sitecms.application.cms.list_content import projects_by_progress
from sitecms.domain.exceptions import ValidationError
from sitecms.domain.tenancy import sanitize_site_id
from sitecms.store.documents import CONTENT_COLLECTIONS
from sitecms.store.live import LiveQueryHub, Subscription

logger = logging.getLogger(__name__)

PUBLIC = "public"
ADMIN = "admin"
VIEWS = (PUBLIC, ADMIN)

ADMIN_TABS = ("pages", "news", "projects", "requests")
DEFAULT_ADMIN_TAB = "news"


def parse_view(raw: str | None) -> str:
    return ADMIN if (raw or "").strip().lower() == ADMIN else PUBLIC


class ViewRouter:
    """
    Public/Admin state machine for one site.

    The router owns the live subscriptions its current view needs. Every
    state change releases all of them before the next view subscribes, so a
    view never receives another view's (or another site's) data.
    """

    def __init__(
        self,
        hub: LiveQueryHub,
        *,
        site_id: str,
        view: str = PUBLIC,
        tab: str = DEFAULT_ADMIN_TAB,
        on_change: Callable[[ViewRouter], None] | None = None,
    ) -> None:
        if view not in VIEWS:
            raise ValidationError(f"Unknown view: {view}")
        if tab not in ADMIN_TABS:
            raise ValidationError(f"Unknown admin tab: {tab}")

        self._hub = hub
        self._on_change = on_change
        self._lock = RLock()
        self._subscriptions: list[Subscription] = []
        self._snapshots: dict[str, list[dict[str, Any]]] = {}
        self.site_id = site_id
        self.view = view
        self.tab = tab

    @classmethod
    def from_query(
        cls,
        hub: LiveQueryHub,
        args: Mapping[str, str],
        *,
        default_site_id: str,
        on_change: Callable[[ViewRouter], None] | None = None,
    ) -> ViewRouter:
        tab = args.get("tab") or DEFAULT_ADMIN_TAB
        return cls(
            hub,
            site_id=sanitize_site_id(args.get("siteId"), default_site_id),
            view=parse_view(args.get("view")),
            tab=tab if tab in ADMIN_TABS else DEFAULT_ADMIN_TAB,
            on_change=on_change,
        )

    # ------------------------
    # State
    # ------------------------

    @property
    def collections(self) -> tuple[str, ...]:
        # Admin keeps every tab live so each tab label can show its count
        if self.view == PUBLIC:
            return CONTENT_COLLECTIONS
        return ADMIN_TABS

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        with self._lock:
            return tuple(self._subscriptions)

    @property
    def loading(self) -> bool:
        with self._lock:
            return any(name not in self._snapshots for name in self.collections)

    def query_string(self) -> str:
        params = {"siteId": self.site_id, "view": self.view}
        if self.view == ADMIN:
            params["tab"] = self.tab
        return urlencode(params)

    # ------------------------
    # Transitions
    # ------------------------

    def open(self) -> ViewRouter:
        with self._lock:
            if self._subscriptions:
                return self
            try:
                for name in self.collections:
                    self._subscriptions.append(
                        self._hub.subscribe(name, self.site_id, self._receiver(name))
                    )
            except Exception:
                self.close()
                raise
        logger.debug("View %s opened for site %s", self.view, self.site_id)
        return self

    def navigate(self, view: str, *, tab: str | None = None) -> ViewRouter:
        if view not in VIEWS:
            raise ValidationError(f"Unknown view: {view}")
        if tab is not None and tab not in ADMIN_TABS:
            raise ValidationError(f"Unknown admin tab: {tab}")

        with self._lock:
            self.close()
            self.view = view
            if tab is not None:
                self.tab = tab
            return self.open()

    def select_tab(self, tab: str) -> ViewRouter:
        if tab not in ADMIN_TABS:
            raise ValidationError(f"Unknown admin tab: {tab}")

        with self._lock:
            if self.view != ADMIN or not self._subscriptions:
                return self.navigate(ADMIN, tab=tab)
            self.tab = tab
        if self._on_change is not None:
            self._on_change(self)
        return self

    def set_tenant(self, raw_site_id: str | None) -> ViewRouter:
        site_id = sanitize_site_id(raw_site_id)
        if not site_id:
            raise ValidationError("siteId must contain letters, digits or hyphens")

        with self._lock:
            self.close()
            self.site_id = site_id
            return self.open()

    def close(self) -> None:
        with self._lock:
            subscriptions, self._subscriptions = self._subscriptions, []
            self._snapshots = {}
        for subscription in subscriptions:
            subscription.close()

    def __enter__(self) -> ViewRouter:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------
    # Rendering
    # ------------------------

    def render(self) -> dict[str, Any]:
        with self._lock:
            snapshots = {name: list(self._snapshots.get(name, [])) for name in self.collections}

        if self.view == PUBLIC:
            sections = dict(snapshots)
            sections["projects"] = projects_by_progress(sections["projects"])
        else:
            sections = {self.tab: snapshots[self.tab]}

        data: dict[str, Any] = {
            "site_id": self.site_id,
            "view": self.view,
            "loading": self.loading,
            "query": self.query_string(),
            "sections": sections,
        }
        if self.view == ADMIN:
            data["tab"] = self.tab
            data["counts"] = {name: len(snapshot) for name, snapshot in snapshots.items()}
        return data

    def _receiver(self, name: str) -> Callable[[list[dict[str, Any]]], None]:
        site_id = self.site_id

        def receive(snapshot: list[dict[str, Any]]) -> None:
            with self._lock:
                # Late delivery for a site or view we already left
                if site_id != self.site_id or name not in self.collections:
                    return
                self._snapshots[name] = snapshot
            if self._on_change is not None:
                self._on_change(self)

        return receive
