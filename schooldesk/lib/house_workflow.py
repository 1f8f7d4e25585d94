"""Create a house and assign its teachers.

The backend has no combined endpoint, so this sends one request for the house
and one per teacher. Nothing is rolled back: when some assignments fail the
house still exists and the user is told it was a partial success.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from flask_babel import _

from schooldesk.lib.api_client import ApiClient
from schooldesk.lib.auth_context import AuthContext
from schooldesk.lib.entities import get_definition
from schooldesk.lib.events import EventSystem
from schooldesk.lib.exceptions import ApiError, AuthenticationError, ValidationError
from schooldesk.lib.mutation_events import EntityType, MutationEvent, Record
from schooldesk.lib.notifier import Notifier
from schooldesk.lib.validators import require_min_length


@dataclass
class HouseResult:
    success: bool
    message: str
    partial: bool = False
    house: Record | None = None
    failed_teacher_ids: list[int] = field(default_factory=list)
    error: str | None = None


def valid_teacher_ids(teacher_ids: Iterable[Any] | None) -> list[int]:
    """Drop blank and non-numeric ids, keeping order."""
    ids = []
    for teacher_id in teacher_ids or []:
        text = str(teacher_id).strip()
        if re.fullmatch(r"[0-9]+", text):
            ids.append(int(text))
    return ids


def create_house_with_teachers(
    name: str,
    description: str | None,
    teacher_ids: Iterable[Any] | None,
    api: ApiClient,
    auth: AuthContext,
    events: EventSystem,
    notifier: Notifier,
) -> HouseResult:
    try:
        client = auth.client(api)
    except AuthenticationError:
        message = _("Please log in to create houses")
        notifier.show(_("Authentication Error"), message, "error")
        return HouseResult(False, message, error="auth")

    teacher_ids = list(teacher_ids or [])
    try:
        name = require_min_length({"name": name}, "name", 2)
        if not teacher_ids:
            raise ValidationError(_("Please select at least one teacher"), "teacher_ids")
        ids = valid_teacher_ids(teacher_ids)
        if not ids:
            raise ValidationError(_("No valid teachers selected"), "teacher_ids")
    except ValidationError as e:
        notifier.show(_("Validation Error"), e.message, "error")
        return HouseResult(False, e.message, error="validation")

    definition = get_definition(EntityType.HOUSE)
    house_data = {"name": name, "description": (description or "").strip() or None}
    try:
        response = client.post(definition.endpoint, house_data)
        if not response.success or not isinstance(response.data, dict) or response.data.get("id") is None:
            raise ApiError(response.message or _("Failed to create house"), status=response.status)
    except ApiError as e:
        notifier.show(_("Error"), e.message, "error")
        return HouseResult(False, e.message, error="api")

    house = {**house_data, **response.data}
    house_id = house["id"]
    logging.info(f"House created with id {house_id}, assigning {len(ids)} teacher(s)")

    failed = []
    for teacher_id in ids:
        try:
            assigned = client.post(
                f"{definition.item_path(house_id)}/assign-teacher", {"teacher_id": teacher_id}
            )
            if not assigned.success:
                failed.append(teacher_id)
        except ApiError as e:
            logging.warning(f"Assigning teacher {teacher_id} to house {house_id} failed: {e}")
            failed.append(teacher_id)

    house.setdefault("teacher_count", len(ids) - len(failed))
    if failed:
        message = _('House "%s" created but some teacher assignments failed') % name
        notifier.show(_("Partial Success"), message, "warning")
    else:
        message = _('House "%(name)s" created successfully with %(count)s teacher(s) assigned') % {
            "name": name,
            "count": len(ids),
        }
        notifier.show(_("Success"), message, "success")

    # The house exists either way, so pages still get the new record
    event = MutationEvent.created(EntityType.HOUSE, house)
    events.emit(event.name, event)
    return HouseResult(True, message, partial=bool(failed), house=house, failed_teacher_ids=failed)
