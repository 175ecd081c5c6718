"""Template catalog loader for the outreach generation service."""

import logging
from typing import Dict, List, Optional
import requests
from .config import Config
from .errors import CatalogFetchError
from .models import TemplateOption

# Configure logger
logger = logging.getLogger(__name__)

TUNNEL_WARNING_HEADER = "ngrok-skip-browser-warning"


class TemplateCatalogLoader:
    """Fetches the template id -> description mapping from the service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = Config.templates_url(base_url)
        self.session = session or requests.Session()
        self.session.headers.update({TUNNEL_WARNING_HEADER: "true"})

    def load_catalog(self) -> Dict[str, str]:
        """Fetch the template catalog, raising CatalogFetchError on any failure."""
        logger.info(f"Attempting to fetch templates from: {self.url}")

        try:
            response = self.session.get(self.url)
        except requests.RequestException as e:
            logger.error(f"Error fetching templates: {e}")
            raise CatalogFetchError(f"Failed to fetch templates: {e}") from e

        logger.info(f"Response status: {response.status_code}")

        if not 200 <= response.status_code < 300:
            logger.error(f"Response error text: {response.text}")
            raise CatalogFetchError(
                f"HTTP error! status: {response.status_code}, message: {response.text}"
            )

        try:
            template_data = response.json()
        except ValueError as e:
            logger.error(f"Templates response is not valid JSON: {e}")
            raise CatalogFetchError("The templates response could not be parsed.") from e

        if not isinstance(template_data, dict):
            raise CatalogFetchError("The templates response is not a template mapping.")

        if not template_data:
            raise CatalogFetchError(
                "No email templates found. Please check the template folder."
            )

        catalog = {str(key): str(value) for key, value in template_data.items()}
        logger.info(f"Fetched {len(catalog)} templates")
        return catalog


def template_options(catalog: Optional[Dict[str, str]]) -> List[TemplateOption]:
    """Build sorted select options labelled ``"<id> - <description>"``."""
    if not catalog:
        return []

    return [
        TemplateOption(value=template_id, label=f"{template_id.replace('_', ' ')} - {description}")
        for template_id, description in sorted(catalog.items())
    ]
