"""Panel session state transitions.

Each function takes the current ``SessionState`` and returns a new one, so
the catalog loader and draft generator can be driven without a UI.
"""

import logging
from typing import Optional
from .draft_generator import DraftGenerator
from .errors import OutreachError
from .fields import RecordLike
from .models import SessionState
from .template_catalog import TemplateCatalogLoader

# Configure logger
logger = logging.getLogger(__name__)


def start_catalog_fetch(state: SessionState) -> SessionState:
    return state.model_copy(update={"is_fetching_catalog": True, "catalog_error": None})


def refresh_catalog(state: SessionState, loader: TemplateCatalogLoader) -> SessionState:
    """Load the catalog; a failure keeps whatever catalog the session had."""
    state = start_catalog_fetch(state)
    try:
        catalog = loader.load_catalog()
    except OutreachError as e:
        logger.error(f"Detailed fetch error: {e}")
        return finish_catalog_fetch(state, error=str(e))

    return finish_catalog_fetch(state, catalog=catalog)


def finish_catalog_fetch(
    state: SessionState, catalog: Optional[dict] = None, error: Optional[str] = None
) -> SessionState:
    update = {"is_fetching_catalog": False, "catalog_error": error}
    if error is None:
        update["catalog"] = catalog
    return state.model_copy(update=update)


CLEARED_ATTEMPT = {"draft": None, "generation_error": None, "generation_error_kind": None}


def select_record(state: SessionState, record_id: Optional[str]) -> SessionState:
    """Select a record, clearing the previous draft and generation error."""
    return state.model_copy(update={"selected_record_id": record_id, **CLEARED_ATTEMPT})


def select_template(state: SessionState, template_id: Optional[str]) -> SessionState:
    """Select a template, clearing the previous draft and generation error."""
    return state.model_copy(update={"selected_template": template_id, **CLEARED_ATTEMPT})


def reset_session(state: SessionState) -> SessionState:
    """Return to the session-start state, keeping the catalog and record selection."""
    return SessionState(catalog=state.catalog, selected_record_id=state.selected_record_id)


def can_generate(state: SessionState) -> bool:
    return bool(
        state.selected_record_id and state.selected_template and not state.is_generating
    )


def start_generation(state: SessionState) -> SessionState:
    return state.model_copy(update={"is_generating": True, **CLEARED_ATTEMPT})


def generate(
    state: SessionState, record: Optional[RecordLike], generator: DraftGenerator
) -> SessionState:
    """Run one generation attempt and store its draft or error message."""
    state = start_generation(state)
    try:
        draft = generator.generate_draft(record, state.selected_template, state.catalog)
    except OutreachError as e:
        logger.error(f"Generation failed: {e}")
        return state.model_copy(
            update={
                "is_generating": False,
                "generation_error": str(e),
                "generation_error_kind": type(e).__name__,
            }
        )

    return state.model_copy(update={"is_generating": False, "draft": draft})
