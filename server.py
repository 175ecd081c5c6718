"""FastAPI application serving the outreach draft panel."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from utils.config import Config
from utils.draft_generator import DraftGenerator
from utils.errors import MissingFieldError
from utils.models import SessionState
from utils.records import RecordStore
from utils.session import (
    can_generate,
    finish_catalog_fetch,
    generate,
    refresh_catalog,
    select_record,
    select_template,
    start_catalog_fetch,
    start_generation,
)
from utils.template_catalog import TemplateCatalogLoader, template_options


# Configure logging
logging.basicConfig(level=getattr(logging, Config.LOG_LEVEL))
logger = logging.getLogger(__name__)


class Panel:
    """The one panel session served by this app."""

    def __init__(
        self,
        records: RecordStore,
        loader: Optional[TemplateCatalogLoader] = None,
        generator: Optional[DraftGenerator] = None,
    ):
        self.records = records
        self.loader = loader or TemplateCatalogLoader()
        self.generator = generator or DraftGenerator()
        self.state = SessionState()


class RecordSelection(BaseModel):
    record_id: Optional[str] = None


class TemplateSelection(BaseModel):
    template_id: Optional[str] = None


def _load_records() -> RecordStore:
    try:
        return RecordStore.from_file(Config.RECORDS_FILE, table_name=Config.TABLE_NAME)
    except FileNotFoundError:
        logger.warning(f"Records file not found: {Config.RECORDS_FILE}")
        return RecordStore(table_name=Config.TABLE_NAME)


async def _refresh_templates(panel: Panel) -> None:
    panel.state = start_catalog_fetch(panel.state)
    try:
        state = await asyncio.to_thread(refresh_catalog, panel.state, panel.loader)
    except Exception as e:
        logger.error(f"Unexpected error refreshing templates: {e}")
        panel.state = finish_catalog_fetch(panel.state, error=str(e))
        raise
    finally:
        if panel.state.is_fetching_catalog:
            panel.state = panel.state.model_copy(update={"is_fetching_catalog": False})

    panel.state = finish_catalog_fetch(
        panel.state, catalog=state.catalog, error=state.catalog_error
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    # Startup
    logger.info("Starting Outreach Draft Panel")

    if not Config.validate():
        logger.error("Configuration validation failed")
        raise RuntimeError("Invalid configuration")

    if not hasattr(app.state, "panel"):
        app.state.panel = Panel(_load_records())

    try:
        await _refresh_templates(app.state.panel)
    except Exception as e:
        logger.error(f"Template catalog unavailable at startup: {e}")

    yield

    # Shutdown
    logger.info("Shutting down Outreach Draft Panel")


# Create FastAPI app
app = FastAPI(
    title="Outreach Draft Panel",
    description="Pick a record and a template, generate an outreach email draft",
    version="1.0.0",
    lifespan=lifespan,
)


def _panel() -> Panel:
    return app.state.panel


@app.get("/")
async def root():
    """Root endpoint with system information."""
    return {
        "message": "Outreach Draft Panel",
        "version": "1.0.0",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "config_valid": Config.validate()}


@app.get("/state")
async def get_state():
    return _panel().state


@app.get("/templates")
async def get_templates():
    """Template options for selection."""
    state = _panel().state
    return {
        "options": template_options(state.catalog),
        "error": state.catalog_error,
        "is_fetching": state.is_fetching_catalog,
    }


@app.post("/templates/refresh")
async def refresh_templates():
    """Manually retry loading the template catalog."""
    panel = _panel()
    if panel.state.is_fetching_catalog:
        raise HTTPException(status_code=409, detail="Templates are already being fetched")

    try:
        await _refresh_templates(panel)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    if panel.state.catalog_error:
        raise HTTPException(status_code=502, detail=panel.state.catalog_error)
    return {"options": template_options(panel.state.catalog)}


@app.get("/records")
async def list_records():
    return {"records": [record.summary() for record in _panel().records.all()]}


@app.post("/select/record")
async def choose_record(selection: RecordSelection):
    panel = _panel()
    if selection.record_id is not None and selection.record_id not in panel.records:
        raise HTTPException(status_code=404, detail=f"Unknown record: {selection.record_id}")

    panel.state = select_record(panel.state, selection.record_id)
    return panel.state


@app.post("/select/template")
async def choose_template(selection: TemplateSelection):
    panel = _panel()
    panel.state = select_template(panel.state, selection.template_id)
    return panel.state


@app.post("/generate")
async def generate_draft():
    """Generate a draft for the selected record and template."""
    panel = _panel()
    if panel.state.is_generating:
        raise HTTPException(status_code=409, detail="A draft is already being generated")
    if not can_generate(panel.state):
        raise HTTPException(status_code=400, detail="Please select a record and a template.")

    issued = start_generation(panel.state)
    panel.state = issued
    record = panel.records.get(issued.selected_record_id)

    try:
        outcome = await asyncio.to_thread(generate, issued, record, panel.generator)
    except Exception as e:
        logger.error(f"Unexpected error generating draft: {e}")
        panel.state = panel.state.model_copy(
            update={"generation_error": str(e), "generation_error_kind": type(e).__name__}
        )
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        if panel.state.is_generating:
            panel.state = panel.state.model_copy(update={"is_generating": False})

    if (
        panel.state.selected_record_id != issued.selected_record_id
        or panel.state.selected_template != issued.selected_template
    ):
        # Selection changed while in flight; drop the outcome
        raise HTTPException(status_code=409, detail="Selection changed during generation")

    panel.state = panel.state.model_copy(
        update={
            "is_generating": False,
            "draft": outcome.draft,
            "generation_error": outcome.generation_error,
            "generation_error_kind": outcome.generation_error_kind,
        }
    )

    if outcome.draft is None:
        status_code = 400 if outcome.generation_error_kind == MissingFieldError.__name__ else 502
        raise HTTPException(status_code=status_code, detail=outcome.generation_error)

    return outcome.draft


if __name__ == "__main__":
    uvicorn.run(
        "server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=Config.LOG_LEVEL.lower(),
    )
