"""Generate one outreach draft from the command line."""
import argparse
import logging
import sys
from pathlib import Path
from utils.config import Config
from utils.draft_generator import DraftGenerator
from utils.models import SessionState
from utils.records import RecordStore
from utils.session import generate, refresh_catalog, select_record, select_template
from utils.template_catalog import TemplateCatalogLoader, template_options

# Configure logging for the entire application
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate an outreach email draft")
    parser.add_argument("--records", default=Config.RECORDS_FILE, help="CSV or JSON file with outreach records")
    parser.add_argument("--record-id", help="Record to draft for")
    parser.add_argument("--template", help="Template id to use")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Load templates, pick a record and template, and print the draft."""
    args = parse_args(argv)
    logger.info("📧 Running Outreach Draft Generator")
    logger.info("=" * 60)

    if not Config.validate():
        return 1

    state = refresh_catalog(SessionState(), TemplateCatalogLoader())
    if state.catalog_error:
        logger.error(f"❌ Error Fetching Templates: {state.catalog_error}")
        return 1

    logger.info("Available templates:")
    for option in template_options(state.catalog):
        logger.info(f"  {option.value}: {option.label}")

    if not Path(args.records).exists():
        logger.error(f"❌ Records file not found: {args.records}")
        return 1

    records = RecordStore.from_file(args.records, table_name=Config.TABLE_NAME)
    if not args.record_id or not args.template:
        logger.info("Records:")
        for record in records.all():
            summary = record.summary()
            logger.info(f"  {summary['id']}: {summary['name']} ({summary['organization']})")
        logger.info("Pass --record-id and --template to generate a draft.")
        return 0

    state = select_record(state, args.record_id)
    state = select_template(state, args.template)
    state = generate(state, records.get(args.record_id), DraftGenerator())

    if state.generation_error:
        logger.error(f"❌ Generation Error: {state.generation_error}")
        return 1

    draft = state.draft
    logger.info("✅ Draft Generated!")
    logger.info(f"To: {draft.contact_name} ({draft.contact_email or 'No Email'})")
    logger.info(f"Company: {draft.company_name}")
    logger.info(f"Template: {draft.result.template_used}")
    logger.info(f"Open in email client: {draft.mailto_link}")
    logger.info("\n" + draft.email_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
