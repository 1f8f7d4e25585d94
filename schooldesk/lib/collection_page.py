"""Page controller owning one entity collection."""

from __future__ import annotations

import logging
from typing import Any

from flask_babel import _

from schooldesk.lib.api_client import ApiClient
from schooldesk.lib.auth_context import AuthContext
from schooldesk.lib.collection_store import CollectionStore
from schooldesk.lib.entities import EntityDefinition
from schooldesk.lib.events import EventSystem
from schooldesk.lib.exceptions import ApiError, AuthenticationError
from schooldesk.lib.mutation_events import Key, MutationEvent, MutationKind, Record, event_name
from schooldesk.lib.notifier import Notifier


class CollectionPage:
    """Keeps a page's table in sync with form-driven mutations.

    The page loads its collection once, then listens for the entity's
    saved/updated/deleted events and patches the store in place. An event
    without a record falls back to a full refetch.
    """

    def __init__(
        self,
        definition: EntityDefinition,
        api: ApiClient,
        auth: AuthContext,
        events: EventSystem,
        notifier: Notifier,
    ) -> None:
        self.definition = definition
        self.store = CollectionStore()
        self.loading = False
        self.loaded = False
        self.refetch_always = False
        self._api = api
        self._auth = auth
        self._events = events
        self._notifier = notifier
        self._alive = False
        # Bumped on every mount/unmount so late fetch results can be discarded
        self._generation = 0

    @property
    def entity(self):
        return self.definition.entity

    @property
    def is_alive(self) -> bool:
        return self._alive

    def mount(self, load: bool = True) -> None:
        if self._alive:
            return
        self._alive = True
        self._generation += 1
        for kind in MutationKind:
            self._events.on(event_name(self.entity, kind), self.handle)
        if load:
            self.load_data()

    def unmount(self) -> None:
        if not self._alive:
            return
        for kind in MutationKind:
            self._events.off(event_name(self.entity, kind), self.handle)
        self._alive = False
        self._generation += 1
        self.store = CollectionStore()
        self.loaded = False

    def load_data(self) -> bool:
        """Fetch the full list from the backend. Returns True when the store was refreshed."""
        generation = self._generation
        self.loading = True
        try:
            client = self._auth.client(self._api)
            response = client.get(self.definition.endpoint)
            if not response.success:
                raise ApiError(response.message or "", status=response.status)
            records = response.data or []
            if not isinstance(records, list):
                raise ApiError(_("Unexpected response while loading %s") % self.definition.title.lower())
            if not self._alive or generation != self._generation:
                logging.debug(f"Discarding {self.definition.title} fetch for an unmounted page")
                return False
            self.store.load(records)
            self.loaded = True
            self._publish()
            return True
        except AuthenticationError:
            self._notifier.show(_("Authentication Error"), _("Please log in to view data"), "error")
        except (ApiError, ValueError) as e:
            message = str(e) or _("Failed to load %s data") % self.definition.title.lower()
            self._notifier.show(_("Error"), message, "error")
        finally:
            self.loading = False
        return False

    def handle(self, event: MutationEvent) -> None:
        """Apply a mutation event published by a form."""
        if not self._alive:
            return
        if event.entity is not self.entity:
            return
        if event.needs_refetch or self.refetch_always:
            logging.info(f"Reloading {self.definition.title} after {event.name}")
            self.load_data()
            return
        self.store.apply(event)
        self._publish()

    def handle_payload(self, name: str, payload: dict[str, Any] | None) -> None:
        """Apply an event received in its wire form."""
        self.handle(MutationEvent.from_payload(name, payload))

    def _publish(self) -> None:
        self._events.emit("collection_update", self.entity, self.store.snapshot())

    def rows(self) -> list[Record]:
        return self.store.snapshot()

    def find(self, key: Key) -> Record | None:
        return self.store.find(key)
