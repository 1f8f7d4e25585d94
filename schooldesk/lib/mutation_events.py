"""Event vocabulary shared by form leaves and collection pages.

Every entity family publishes three events: ``<entity>-saved``,
``<entity>-updated`` and ``<entity>-deleted``. On the wire the payload is
``{<entity>: record}`` for saved/updated and ``{<entity>Id: id}`` for deleted.
Names are always derived from :class:`EntityType` and :class:`MutationKind`.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Union

Key = Union[int, str]
Record = dict[str, Any]


class EntityType(enum.Enum):
    """Entity families managed by the dashboard. Values are the payload keys."""

    EVENT = "event"
    NEWS = "news"
    GRADING_PERIOD = "gradingPeriod"
    GRADING_POLICY = "gradingPolicy"
    USER_ROLE = "userRole"
    TEACHER = "teacher"
    HOUSE = "house"
    INVOICE = "invoice"
    PAYMENT = "payment"
    ANNOUNCEMENT = "announcement"
    SETTING = "setting"

    @property
    def payload_key(self) -> str:
        return self.value

    @property
    def id_key(self) -> str:
        return self.value + "Id"

    @property
    def slug(self) -> str:
        """Kebab-case form used in event names and URLs, e.g. ``grading-period``."""
        return re.sub(r"(?<!^)(?=[A-Z])", "-", self.value).lower()

    @classmethod
    def from_slug(cls, slug: str) -> EntityType:
        for entity in cls:
            if entity.slug == slug:
                return entity
        raise ValueError(f"Unknown entity: {slug}")


class MutationKind(enum.Enum):
    CREATED = "saved"
    UPDATED = "updated"
    DELETED = "deleted"


def event_name(entity: EntityType, kind: MutationKind) -> str:
    """Return the relay event name for an entity and mutation kind."""
    return f"{entity.slug}-{kind.value}"


@dataclass(frozen=True)
class MutationEvent:
    """A normalized Created/Updated/Deleted signal from a form leaf to its page.

    ``record`` is set for CREATED and UPDATED, ``id`` for DELETED. A CREATED or
    UPDATED event without a record means the server did not echo the object and
    the page must refetch its whole collection.
    """

    kind: MutationKind
    entity: EntityType
    record: Record | None = None
    id: Key | None = None

    @classmethod
    def created(cls, entity: EntityType, record: Record | None) -> MutationEvent:
        return cls(MutationKind.CREATED, entity, record=record)

    @classmethod
    def updated(cls, entity: EntityType, record: Record | None) -> MutationEvent:
        return cls(MutationKind.UPDATED, entity, record=record)

    @classmethod
    def deleted(cls, entity: EntityType, id: Key) -> MutationEvent:
        return cls(MutationKind.DELETED, entity, id=id)

    @property
    def name(self) -> str:
        return event_name(self.entity, self.kind)

    @property
    def needs_refetch(self) -> bool:
        return self.kind is not MutationKind.DELETED and self.record is None

    def to_payload(self) -> dict[str, Any]:
        if self.kind is MutationKind.DELETED:
            return {self.entity.id_key: self.id}
        return {self.entity.payload_key: self.record}

    @classmethod
    def from_payload(cls, name: str, payload: dict[str, Any] | None) -> MutationEvent:
        """Parse a relay event name and its payload back into a MutationEvent."""
        slug, _sep, suffix = name.rpartition("-")
        try:
            kind = MutationKind(suffix)
            entity = EntityType.from_slug(slug)
        except ValueError:
            raise ValueError(f"Unknown mutation event: {name}") from None

        payload = payload or {}
        if kind is MutationKind.DELETED:
            if payload.get(entity.id_key) is None:
                raise ValueError(f"{name} payload is missing {entity.id_key}")
            return cls.deleted(entity, payload[entity.id_key])
        return cls(kind, entity, record=payload.get(entity.payload_key))
