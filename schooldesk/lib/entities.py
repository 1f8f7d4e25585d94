"""Per-entity form rules, backend endpoints and table columns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from schooldesk.lib.mutation_events import EntityType, Record
from schooldesk.lib.validators import safe_number


@dataclass(frozen=True)
class EntityDefinition:
    """Everything a page or form needs to know about one entity family.

    Attributes:
        entity: The family this definition describes.
        endpoint: Backend list endpoint; items live at ``<endpoint>/<id>``.
        title: Human readable plural used in page titles and toasts.
        fields: Form fields sent to the backend, in display order.
        required: Field name -> message shown when it is blank.
        numeric: Fields coerced with safe-parse-or-zero.
        positive: Numeric fields that must be greater than zero.
        flags: Switch fields sent as 0/1.
        min_lengths: Field name -> minimum length after stripping.
        date_ranges: (start, end) pairs that must satisfy start < end.
        columns: Record keys shown in the table.
        derive: Optional hook adding computed fields to the echoed record.
    """

    entity: EntityType
    endpoint: str
    title: str
    fields: tuple[str, ...]
    required: dict[str, str] = field(default_factory=dict)
    numeric: tuple[str, ...] = ()
    positive: tuple[str, ...] = ()
    flags: tuple[str, ...] = ()
    min_lengths: dict[str, int] = field(default_factory=dict)
    date_ranges: tuple[tuple[str, str], ...] = ()
    columns: tuple[str, ...] = ()
    derive: Callable[[Record], Record] | None = None

    @property
    def singular(self) -> str:
        return self.entity.slug.replace("-", " ")

    def item_path(self, key: Any) -> str:
        return f"{self.endpoint}/{key}"


def _invoice_balance(record: Record) -> Record:
    due = safe_number(record.get("amount_due"))
    paid = safe_number(record.get("amount_paid"))
    record["balance"] = due - paid
    record["status"] = "paid" if due - paid <= 0 else "open"
    return record


DEFINITIONS: dict[EntityType, EntityDefinition] = {
    definition.entity: definition
    for definition in (
        EntityDefinition(
            entity=EntityType.EVENT,
            endpoint="/events",
            title="Events",
            fields=("title", "description", "category", "location", "start_date", "end_date", "status", "is_active"),
            required={
                "title": "Please fill in the event title",
                "start_date": "Please select a start date",
                "end_date": "Please select an end date",
            },
            flags=("is_active",),
            date_ranges=(("start_date", "end_date"),),
            columns=("title", "category", "location", "start_date", "end_date", "status"),
        ),
        EntityDefinition(
            entity=EntityType.NEWS,
            endpoint="/news",
            title="News",
            fields=("title", "content", "is_active"),
            required={
                "title": "Please fill in the news title",
                "content": "Please fill in the news content",
            },
            flags=("is_active",),
            columns=("title", "is_active", "created_at"),
        ),
        EntityDefinition(
            entity=EntityType.GRADING_PERIOD,
            endpoint="/grading-periods",
            title="Grading Periods",
            fields=("name", "academic_year_id", "start_date", "end_date", "description", "is_active"),
            required={
                "name": "Please fill in the period name",
                "start_date": "Please fill in the start date",
                "end_date": "Please fill in the end date",
            },
            numeric=("academic_year_id",),
            flags=("is_active",),
            date_ranges=(("start_date", "end_date"),),
            columns=("name", "academic_year", "start_date", "end_date", "is_active"),
        ),
        EntityDefinition(
            entity=EntityType.GRADING_POLICY,
            endpoint="/grading-policies",
            title="Grading Policies",
            fields=("name", "subject_id", "description", "assignment_max_score", "exam_max_score", "is_active"),
            required={
                "name": "Please fill all required fields",
                "subject_id": "Please fill all required fields",
            },
            numeric=("subject_id", "assignment_max_score", "exam_max_score"),
            flags=("is_active",),
            columns=("name", "subject_name", "assignment_max_score", "exam_max_score", "is_active"),
        ),
        EntityDefinition(
            entity=EntityType.USER_ROLE,
            endpoint="/roles",
            title="User Roles",
            fields=("name", "description"),
            required={"name": "Role name is required"},
            columns=("name", "description"),
        ),
        EntityDefinition(
            entity=EntityType.TEACHER,
            endpoint="/teachers",
            title="Teachers",
            fields=("user_id", "employee_id", "qualification", "specialization", "hire_date", "salary", "status"),
            required={
                "user_id": "Please select a user",
                "employee_id": "Please fill in the employee ID",
            },
            numeric=("user_id", "salary"),
            columns=("employee_id", "first_name", "last_name", "specialization", "status"),
        ),
        EntityDefinition(
            entity=EntityType.HOUSE,
            endpoint="/houses",
            title="Houses",
            fields=("name", "description"),
            required={"name": "House name must be at least 2 characters"},
            min_lengths={"name": 2},
            columns=("name", "description", "teacher_count"),
        ),
        EntityDefinition(
            entity=EntityType.INVOICE,
            endpoint="/finance/invoices",
            title="Invoices",
            fields=(
                "student_id",
                "academic_year",
                "grading_period",
                "amount_due",
                "amount_paid",
                "issue_date",
                "due_date",
                "notes",
            ),
            required={
                "student_id": "Select a student",
                "academic_year": "Enter academic year",
                "grading_period": "Enter grading period",
                "amount_due": "Enter amount due",
            },
            numeric=("student_id", "amount_due", "amount_paid"),
            positive=("amount_due",),
            columns=("invoice_number", "student_name", "amount_due", "amount_paid", "balance", "status"),
            derive=_invoice_balance,
        ),
        EntityDefinition(
            entity=EntityType.PAYMENT,
            endpoint="/finance/payments",
            title="Payments",
            fields=("student_id", "invoice_id", "amount", "method", "paid_on", "reference", "notes"),
            required={
                "student_id": "Please select a student or invoice",
                "amount": "Enter the amount paid",
            },
            numeric=("student_id", "invoice_id", "amount"),
            columns=("receipt_number", "student_name", "amount", "method", "paid_on"),
        ),
        EntityDefinition(
            entity=EntityType.ANNOUNCEMENT,
            endpoint="/announcements",
            title="Announcements",
            fields=(
                "title",
                "content",
                "announcement_type",
                "priority",
                "target_audience",
                "target_class_id",
                "is_pinned",
                "is_active",
            ),
            required={
                "title": "Please fill in the announcement title",
                "content": "Please fill in the announcement content",
            },
            numeric=("target_class_id",),
            flags=("is_pinned", "is_active"),
            columns=("title", "announcement_type", "priority", "target_audience", "is_pinned"),
        ),
        EntityDefinition(
            entity=EntityType.SETTING,
            endpoint="/settings",
            title="System Settings",
            fields=("setting_key", "setting_value", "setting_type", "category", "description", "is_active"),
            required={"setting_key": "Setting key is required"},
            flags=("is_active",),
            columns=("setting_key", "setting_value", "setting_type", "category"),
        ),
    )
}


def get_definition(entity: EntityType | str) -> EntityDefinition:
    """Look up a definition by entity type or URL slug. Raises ValueError if unknown."""
    if isinstance(entity, str):
        entity = EntityType.from_slug(entity)
    return DEFINITIONS[entity]
