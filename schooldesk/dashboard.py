"""Core dashboard object wiring the API client, pages, forms and notifications."""

from __future__ import annotations

import logging
from typing import Any

import requests
from flask_babel import _

from schooldesk.lib.api_client import DEFAULT_TIMEOUT, ApiClient
from schooldesk.lib.auth_context import AuthContext
from schooldesk.lib.collection_page import CollectionPage
from schooldesk.lib.entities import get_definition
from schooldesk.lib.events import EventSystem
from schooldesk.lib.exceptions import ApiError
from schooldesk.lib.forms import EntityForm, FormMode, SubmitResult
from schooldesk.lib.house_workflow import HouseResult, create_house_with_teachers
from schooldesk.lib.mutation_events import EntityType, Key, MutationEvent, MutationKind, event_name
from schooldesk.lib.notifier import Notifier
from schooldesk.lib.preference_manager import PreferenceManager


class Dashboard:
    """Owns one page per entity family and relays their changes to browsers.

    Attributes:
        events: Relay between forms, pages and the Socket.IO layer.
        auth: The signed-in session shared by every page and form.
        notifier: Toast sink.
        api: Unauthenticated client; pages and forms bind the token per call.
        pages: One CollectionPage per EntityType, mounted on first use.
    """

    def __init__(
        self,
        api_url: str,
        api_timeout: float | None = None,
        api_token: str | None = None,
        config_file_path: str = "config.ini",
        hide_notifications: bool = False,
        toast_duration: int | None = None,
        socketio=None,
        session: requests.Session | None = None,
    ) -> None:
        self.socketio = socketio
        self.events = EventSystem()
        self.auth = AuthContext(token=api_token)
        self.notifier = Notifier(self.events)
        self.api = ApiClient(
            api_url,
            timeout=DEFAULT_TIMEOUT,
            session=session,
            on_unauthorized=self.auth.sign_out,
        )
        self.pages: dict[EntityType, CollectionPage] = {
            entity: CollectionPage(get_definition(entity), self.api, self.auth, self.events, self.notifier)
            for entity in EntityType
        }

        # Preferences sync onto the properties below
        self.preferences = PreferenceManager(config_file_path=config_file_path, target=self)
        self.preferences.apply_all(
            api_timeout=api_timeout,
            hide_notifications=hide_notifications,
            toast_duration=toast_duration,
        )

        self.events.on("notification", self._emit_notification)
        self.events.on("collection_update", self._emit_collection)
        for entity in EntityType:
            for kind in MutationKind:
                self.events.on(event_name(entity, kind), self._emit_mutation)

    # Preference-backed settings

    @property
    def toast_duration(self) -> int:
        return self.notifier.default_duration

    @toast_duration.setter
    def toast_duration(self, value: Any) -> None:
        self.notifier.default_duration = int(value)

    @property
    def hide_notifications(self) -> bool:
        return self.notifier.hide_notifications

    @hide_notifications.setter
    def hide_notifications(self, value: Any) -> None:
        self.notifier.hide_notifications = bool(value)

    @property
    def api_timeout(self) -> float:
        return self.api.timeout

    @api_timeout.setter
    def api_timeout(self, value: Any) -> None:
        self.api.timeout = float(value)

    @property
    def refresh_after_mutation(self) -> bool:
        return all(page.refetch_always for page in self.pages.values())

    @refresh_after_mutation.setter
    def refresh_after_mutation(self, value: Any) -> None:
        for page in self.pages.values():
            page.refetch_always = bool(value)

    def change_preferences(self, preference: str, val: Any) -> tuple[bool, str]:
        return self.preferences.set(preference, val)

    def clear_preferences(self) -> tuple[bool, str]:
        return self.preferences.reset_all()

    # Socket.IO relay

    def _emit_notification(self, toast: dict[str, Any]) -> None:
        if self.socketio:
            self.socketio.emit("notification", toast, namespace="/")

    def _emit_collection(self, entity: EntityType, rows: list[dict[str, Any]]) -> None:
        if self.socketio:
            self.socketio.emit("collection_update", {"entity": entity.slug, "rows": rows}, namespace="/")

    def _emit_mutation(self, event: MutationEvent) -> None:
        if self.socketio:
            self.socketio.emit(event.name, event.to_payload(), namespace="/")

    # Pages and forms

    def get_page(self, entity: EntityType | str) -> CollectionPage:
        """Return the page for an entity, mounting and loading it on first use."""
        page = self.pages[get_definition(entity).entity]
        if not page.is_alive:
            page.mount()
        return page

    def close_page(self, entity: EntityType | str) -> None:
        self.pages[get_definition(entity).entity].unmount()

    def refresh(self, entity: EntityType | str) -> bool:
        """Reload a page from the backend. Returns True when the collection was refreshed."""
        page = self.pages[get_definition(entity).entity]
        if not page.is_alive:
            page.mount()
            return page.loaded
        return page.load_data()

    def form(self, entity: EntityType | str, mode: FormMode, record_id: Key | None = None) -> EntityForm:
        """Build a form; update and delete forms start from the page's copy of the record.

        Raises:
            KeyError: If ``record_id`` is not in the page's collection.
        """
        definition = get_definition(entity)
        record = None
        if mode is not FormMode.CREATE:
            record = self.get_page(definition.entity).find(record_id)
            if record is None:
                raise KeyError(record_id)
        return EntityForm(definition, self.api, self.auth, self.events, self.notifier, mode, record)

    def submit_form(
        self,
        entity: EntityType | str,
        mode: FormMode,
        values: dict[str, Any] | None = None,
        record_id: Key | None = None,
    ) -> SubmitResult:
        form = self.form(entity, mode, record_id)
        form.open()
        if values:
            form.update_fields(values)
        return form.submit()

    def create_house(self, name: str, description: str | None, teacher_ids: list[Any]) -> HouseResult:
        return create_house_with_teachers(
            name, description, teacher_ids, self.api, self.auth, self.events, self.notifier
        )

    # Session

    def login(self, email: str, password: str) -> tuple[bool, str]:
        """Sign in against the backend and store the token. Returns (success, message)."""
        try:
            response = self.api.post("/auth/login", {"email": email, "password": password})
        except ApiError as e:
            self.notifier.show(_("Login failed"), e.message, "error")
            return (False, e.message)

        data = response.data if isinstance(response.data, dict) else {}
        user = data.get("user") if isinstance(data.get("user"), dict) else data
        token = user.get("token") or data.get("token")
        if not response.success or not token:
            message = response.message or data.get("message") or _("Login failed")
            self.notifier.show(_("Login failed"), message, "error")
            return (False, message)

        self.auth.sign_in(token, {k: v for k, v in user.items() if k != "token"})
        # Collections were loaded for the previous user
        for page in self.pages.values():
            page.unmount()
        return (True, data.get("message") or _("Login successful"))

    def logout(self) -> None:
        self.auth.sign_out()
        for page in self.pages.values():
            page.unmount()
        logging.info("Closed all pages after logout")
