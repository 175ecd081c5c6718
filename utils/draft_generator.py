"""Outreach draft generation against the remote generation service."""

import json
import logging
from typing import Dict, Optional
from urllib.parse import quote
import requests
from pydantic import ValidationError
from .config import Config
from .errors import (
    GenerationTransportError,
    MalformedResponseError,
    MissingFieldError,
    ServerError,
)
from .fields import RecordLike, extract_context
from .models import GeneratedDraft, GenerationRequest, GenerationResult
from .template_catalog import TUNNEL_WARNING_HEADER

# Configure logger
logger = logging.getLogger(__name__)

# Characters JavaScript's encodeURIComponent leaves untouched, besides alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def build_mailto_link(email: str, subject: str, body: str) -> str:
    """Build a mailto URI; an empty recipient leaves the address blank."""
    return (
        f"mailto:{encode_uri_component(email or '')}"
        f"?subject={encode_uri_component(subject)}"
        f"&body={encode_uri_component(body)}"
    )


class DraftGenerator:
    """Service for generating outreach drafts from a selected record."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        subject_line: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = Config.generate_url(base_url)
        self.subject_line = subject_line or Config.SUBJECT_LINE
        self.session = session or requests.Session()

    def generate_draft(
        self,
        record: Optional[RecordLike],
        template_id: Optional[str],
        catalog: Optional[Dict[str, str]] = None,
    ) -> GeneratedDraft:
        """Validate the record, request a draft and derive the mailto link.

        The template id is sent as selected; it is not checked against
        ``catalog`` again; the service rejects unknown ids itself.
        """
        if record is None or not template_id:
            raise MissingFieldError(
                "record" if record is None else "template",
                "Please select a record and a template.",
            )

        context = extract_context(record)
        request = GenerationRequest.from_context(context, template_id)
        payload = request.model_dump()

        logger.debug(f"Sending payload to API: {json.dumps(payload, indent=2)}")

        result = self._post(payload)

        draft = GeneratedDraft(
            result=result,
            contact_name=context.contact_name,
            contact_email=context.contact_email,
            company_name=context.company_name,
            mailto_link=build_mailto_link(
                context.contact_email, self.subject_line, result.email_text
            ),
        )
        logger.info(
            f"Generated draft for {context.contact_name} ({context.company_name}) "
            f"using template '{result.template_used or template_id}'"
        )
        return draft

    def _post(self, payload: Dict) -> GenerationResult:
        """Issue the generation request and validate the response shape."""
        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    TUNNEL_WARNING_HEADER: "true",
                },
            )
        except requests.RequestException as e:
            logger.error(f"Error calling generation endpoint {self.url}: {e}")
            raise GenerationTransportError(
                f"Could not reach the generation service: {e}. "
                "Check the API URL and make sure the server is running."
            ) from e

        logger.info(f"Response status: {response.status_code}")

        if not 200 <= response.status_code < 300:
            logger.error(f"API Error: {response.text}")
            raise ServerError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Generation response is not valid JSON: {e}")
            raise MalformedResponseError(
                "The API responded, but did not return an email draft."
            ) from e

        if not isinstance(data, dict) or not data.get("email_text"):
            logger.error(f"Invalid response: {data}")
            raise MalformedResponseError(
                "The API responded, but did not return an email draft."
            )

        try:
            return GenerationResult.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                "The API responded, but did not return an email draft."
            ) from e
