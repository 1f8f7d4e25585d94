"""Create/update/delete forms for a single record.

A form collects input, validates it, submits it to the backend and, on
success, publishes the matching mutation event so the owning page can patch
its collection. Failures leave the collection untouched.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from flask_babel import _

from schooldesk.lib import validators
from schooldesk.lib.api_client import ApiClient, ApiResponse
from schooldesk.lib.auth_context import AuthContext
from schooldesk.lib.entities import EntityDefinition
from schooldesk.lib.events import EventSystem
from schooldesk.lib.exceptions import ApiError, AuthenticationError, ValidationError
from schooldesk.lib.mutation_events import MutationEvent, Record
from schooldesk.lib.notifier import Notifier


class FormMode(enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class FormState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


@dataclass
class SubmitResult:
    """Outcome of a submit. ``error`` is one of "state", "validation", "auth" or "api" on failure."""

    success: bool
    message: str
    event: MutationEvent | None = None
    error: str | None = None


def clean_values(definition: EntityDefinition, values: dict[str, Any]) -> dict[str, Any]:
    """Validate raw form input and return the payload to send.

    Raises:
        ValidationError: On the first failing check, in field order.
    """
    for name in definition.fields:
        if name in definition.required:
            validators.require(values, name, _(definition.required[name]))
    for name in definition.positive:
        message = definition.required.get(name)
        validators.require_positive(values, name, _(message) if message else None)
    for name, length in definition.min_lengths.items():
        validators.require_min_length(values, name, length)
    for start, end in definition.date_ranges:
        validators.check_date_range(values, start, end)

    payload: dict[str, Any] = {}
    for name in definition.fields:
        if name not in values:
            continue
        value = values[name]
        if name in definition.numeric:
            value = validators.safe_number(value)
        elif name in definition.flags:
            value = validators.to_flag(value)
        elif isinstance(value, str):
            value = value.strip()
        payload[name] = value
    return payload


class EntityForm:
    """One modal or dialog bound to an entity definition.

    State moves CLOSED -> OPEN -> VALIDATING -> SUBMITTING, then back to CLOSED
    on success or to OPEN with ``error`` set on failure. Closing discards input.
    """

    def __init__(
        self,
        definition: EntityDefinition,
        api: ApiClient,
        auth: AuthContext,
        events: EventSystem,
        notifier: Notifier,
        mode: FormMode = FormMode.CREATE,
        record: Record | None = None,
    ) -> None:
        if mode is not FormMode.CREATE and (record is None or record.get("id") is None):
            raise ValueError(f"{mode.value} form needs an existing record")
        self.definition = definition
        self.mode = mode
        self.record = dict(record) if record else None
        self._api = api
        self._auth = auth
        self._events = events
        self._notifier = notifier

        self.state = FormState.CLOSED
        self.values: dict[str, Any] = {}
        self.error: str | None = None
        self.can_submit = False
        self.loading = False

    def open(self, initial: dict[str, Any] | None = None) -> None:
        if initial is not None:
            self.values = dict(initial)
        elif self.record is not None:
            self.values = {k: v for k, v in self.record.items() if k in self.definition.fields}
        else:
            self.values = {}
        self.error = None
        self.state = FormState.OPEN
        self._refresh_validity()

    def close(self) -> None:
        self.state = FormState.CLOSED
        self.values = {}
        self.error = None
        self.can_submit = False

    def set_field(self, name: str, value: Any) -> None:
        self.values[name] = value
        self._refresh_validity()

    def update_fields(self, values: dict[str, Any]) -> None:
        self.values.update(values)
        self._refresh_validity()

    def validate(self) -> dict[str, Any]:
        if self.mode is FormMode.DELETE:
            return {}
        return clean_values(self.definition, self.values)

    def _refresh_validity(self) -> None:
        try:
            self.validate()
        except ValidationError:
            self.can_submit = False
        else:
            self.can_submit = True

    def _fail(self, title: str, message: str, error: str) -> SubmitResult:
        self.error = message
        self.state = FormState.OPEN
        self._notifier.show(title, message, "error")
        return SubmitResult(False, message, error=error)

    def _send(self, client: ApiClient, payload: dict[str, Any]) -> ApiResponse:
        if self.mode is FormMode.CREATE:
            return client.post(self.definition.endpoint, payload)
        path = self.definition.item_path(self.record["id"])
        if self.mode is FormMode.UPDATE:
            return client.put(path, payload)
        return client.delete(path)

    def _echoed_record(self, payload: dict[str, Any], data: Any) -> Record | None:
        """Build the record to publish from what the server sent back."""
        base = dict(self.record) if self.record else {}
        if isinstance(data, dict) and data.get("id") is not None and set(data) - {"id"}:
            record = data
        elif isinstance(data, dict) and data.get("id") is not None:
            record = {**base, **payload, "id": data["id"]}
        elif self.mode is FormMode.UPDATE:
            record = {**base, **payload}
        else:
            return None
        if self.definition.derive is not None:
            record = self.definition.derive(dict(record))
        return record

    def _build_event(self, payload: dict[str, Any], response: ApiResponse) -> MutationEvent:
        """Event for a write the server accepted. An unusable echo publishes no record."""
        entity = self.definition.entity
        if self.mode is FormMode.DELETE:
            return MutationEvent.deleted(entity, self.record["id"])
        try:
            record = self._echoed_record(payload, response.data)
        except Exception as e:
            logging.exception(f"Could not read the echoed {self.definition.singular}, pages will refetch: {e}")
            record = None
        if self.mode is FormMode.CREATE:
            return MutationEvent.created(entity, record)
        return MutationEvent.updated(entity, record)

    def _success_message(self) -> str:
        name = self.definition.singular.capitalize()
        if self.mode is FormMode.CREATE:
            return _("%s created successfully") % name
        if self.mode is FormMode.UPDATE:
            return _("%s updated successfully") % name
        return _("%s deleted successfully") % name

    def submit(self) -> SubmitResult:
        """Validate, send and publish. Never raises for validation, auth or API failures."""
        if self.state is not FormState.OPEN:
            return SubmitResult(False, _("The form is not open"), error="state")

        self.state = FormState.VALIDATING
        try:
            payload = self.validate()
        except ValidationError as e:
            return self._fail(_("Validation Error"), e.message, "validation")

        try:
            client = self._auth.client(self._api)
        except AuthenticationError as e:
            return self._fail(_("Authentication Error"), str(e), "auth")

        self.state = FormState.SUBMITTING
        self.loading = True
        try:
            response = self._send(client, payload)
            if not response.success:
                raise ApiError(
                    response.message or _("Failed to save %s") % self.definition.singular,
                    status=response.status,
                    payload=response.data,
                )
        except ApiError as e:
            return self._fail(_("Error"), e.message, "api")
        except Exception as e:
            logging.exception(f"Unexpected error submitting {self.definition.singular}: {e}")
            return self._fail(
                _("Error"), _("Failed to save %s. Please try again.") % self.definition.singular, "api"
            )
        finally:
            self.loading = False

        # The write succeeded on the server, so from here on nothing reports failure
        event = self._build_event(payload, response)
        message = response.message or self._success_message()
        self._notifier.show(_("Success"), message, "success")
        self.close()
        self._events.emit(event.name, event)
        return SubmitResult(True, message, event)
