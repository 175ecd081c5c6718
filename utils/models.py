"""Pydantic models for data validation."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class OutreachContext(BaseModel):
    """Validated projection of a record used to build a generation request."""

    company_name: str = Field(..., description="Organization the contact belongs to")
    title: str = Field("", description="Contact's job title")
    summary: str = Field("", description="Summary of the organization")
    outreach_angle: str = Field("", description="Angle for outreach")
    note: str = Field("", description="Free-form note")
    contact_name: str = Field(..., description="Contact's full name")
    contact_email: str = Field("", description="Contact's email address")
    drive_folder_url: str = Field(..., description="Google Drive folder URL")


class AirtableContext(BaseModel):
    """Record context sent to the generation service."""

    name: str
    title: str
    summary: str
    angle_for_outreach: str
    note: str


class GenerationRequest(BaseModel):
    """Request body for the generation endpoint."""

    airtable_context: AirtableContext
    contact_name: str
    google_drive_folder_url: str
    template_type: str

    @classmethod
    def from_context(
        cls, context: OutreachContext, template_type: str
    ) -> "GenerationRequest":
        """Build a request from a validated context; the contact email is not sent."""
        return cls(
            airtable_context=AirtableContext(
                name=str(context.company_name),
                title=str(context.title),
                summary=str(context.summary),
                angle_for_outreach=str(context.outreach_angle),
                note=str(context.note),
            ),
            contact_name=str(context.contact_name),
            google_drive_folder_url=str(context.drive_folder_url),
            template_type=template_type,
        )


class GenerationResult(BaseModel):
    """Response model for the generation endpoint; unknown fields pass through."""

    model_config = ConfigDict(extra="allow")

    email_text: str = Field(..., min_length=1, description="Generated email body")
    template_used: Optional[Any] = Field(None, description="Template the service applied")


class GeneratedDraft(BaseModel):
    """Generation result enriched with the contact details and mailto link."""

    result: GenerationResult
    contact_name: str
    contact_email: str = ""
    company_name: str
    mailto_link: str

    @property
    def email_text(self) -> str:
        return self.result.email_text


class TemplateOption(BaseModel):
    """Selectable template option."""

    value: str
    label: str


class SessionState(BaseModel):
    """Single panel session: catalog, selections and the last attempt's outcome."""

    catalog: Optional[Dict[str, str]] = None
    catalog_error: Optional[str] = None
    is_fetching_catalog: bool = False
    selected_record_id: Optional[str] = None
    selected_template: Optional[str] = None
    is_generating: bool = False
    generation_error: Optional[str] = None
    generation_error_kind: Optional[str] = None
    draft: Optional[GeneratedDraft] = None
