"""Field extraction from host records into an outreach context."""

import logging
from typing import Any, Optional, Protocol
from .errors import MissingFieldError
from .models import OutreachContext

# Configure logger
logger = logging.getLogger(__name__)

# Record field names in the Outreach table
DRIVE_FOLDER_FIELD = "Google Drive Folder URL"
ORGANIZATION_FIELD = "Organization"
CONTACT_NAME_FIELD = "Name"
EMAIL_FIELD = "Email"
TITLE_FIELD = "Title"
SUMMARY_FIELD = "Summary"
ANGLE_FIELD = "Angle for Outreach"
NOTE_FIELD = "Note"

REQUIRED_FIELD_MESSAGES = {
    DRIVE_FOLDER_FIELD: "The 'Google Drive Folder URL' field is empty for this record.",
    ORGANIZATION_FIELD: "The 'Organization' field is empty. Please add a company name.",
    CONTACT_NAME_FIELD: "The 'Name' field is empty. Please add a contact name.",
}


class RecordLike(Protocol):
    """Read-only record handle exposed by the host data platform."""

    id: str

    def get_field(self, name: str) -> Any: ...


def normalize_field(value: Any) -> str:
    """Normalize a raw cell value to a string.

    Lists take their first element, linked-entity references their display
    name, and absent values become the empty string.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            return ""
        value = value[0]

    if isinstance(value, dict):
        if value.get("name"):
            return str(value["name"])
        return str(value) if value else ""

    if value is None:
        return ""

    return str(value)


def extract_context(record: Optional[RecordLike]) -> OutreachContext:
    """Read and validate the outreach fields of a record."""
    if record is None:
        raise MissingFieldError("record", "Please select a record and a template.")

    values = {
        name: normalize_field(record.get_field(name))
        for name in (
            DRIVE_FOLDER_FIELD,
            ORGANIZATION_FIELD,
            CONTACT_NAME_FIELD,
            EMAIL_FIELD,
            TITLE_FIELD,
            SUMMARY_FIELD,
            ANGLE_FIELD,
            NOTE_FIELD,
        )
    }

    for field_name, message in REQUIRED_FIELD_MESSAGES.items():
        if not values[field_name]:
            logger.warning(f"Record {record.id} is missing '{field_name}'")
            raise MissingFieldError(field_name, message)

    return OutreachContext(
        company_name=values[ORGANIZATION_FIELD],
        title=values[TITLE_FIELD],
        summary=values[SUMMARY_FIELD],
        outreach_angle=values[ANGLE_FIELD],
        note=values[NOTE_FIELD],
        contact_name=values[CONTACT_NAME_FIELD],
        contact_email=values[EMAIL_FIELD],
        drive_folder_url=values[DRIVE_FOLDER_FIELD],
    )
