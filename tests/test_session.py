from conftest import BASE_URL, FakeResponse, FakeSession, make_record
from utils.draft_generator import DraftGenerator
from utils.models import SessionState
from utils.session import (
    can_generate,
    generate,
    refresh_catalog,
    reset_session,
    select_record,
    select_template,
)
from utils.template_catalog import TemplateCatalogLoader


def loader_with(*responses):
    return TemplateCatalogLoader(base_url=BASE_URL, session=FakeSession(*responses))


def generator_with(*responses):
    return DraftGenerator(base_url=BASE_URL, subject_line="Hello", session=FakeSession(*responses))


def test_refresh_catalog_stores_mapping():
    state = refresh_catalog(SessionState(), loader_with(FakeResponse(200, {"a": "desc"})))

    assert state.catalog == {"a": "desc"}
    assert state.catalog_error is None
    assert state.is_fetching_catalog is False


def test_failed_first_fetch_leaves_catalog_absent():
    state = refresh_catalog(SessionState(), loader_with(FakeResponse(200, {})))

    assert state.catalog is None
    assert "No email templates found" in state.catalog_error


def test_failed_retry_keeps_previous_catalog():
    state = SessionState(catalog={"a": "desc"})

    state = refresh_catalog(state, loader_with(FakeResponse(502, text="bad gateway")))

    assert state.catalog == {"a": "desc"}
    assert "502" in state.catalog_error

    state = refresh_catalog(state, loader_with(FakeResponse(200, {"b": "other"})))

    assert state.catalog == {"b": "other"}
    assert state.catalog_error is None


def test_generate_stores_draft():
    record = make_record()
    state = select_template(select_record(SessionState(catalog={"intro_1": "d"}), record.id), "intro_1")

    state = generate(state, record, generator_with(FakeResponse(200, {"email_text": "Hi Jane"})))

    assert state.draft.email_text == "Hi Jane"
    assert state.generation_error is None
    assert state.is_generating is False


def test_server_error_does_not_set_draft():
    record = make_record()
    state = select_template(select_record(SessionState(), record.id), "intro_1")

    state = generate(state, record, generator_with(FakeResponse(500, text="boom")))

    assert state.draft is None
    assert "500" in state.generation_error
    assert state.generation_error_kind == "ServerError"


def test_missing_field_error_is_stored():
    record = make_record(Name=None)
    state = select_template(select_record(SessionState(), record.id), "intro_1")

    state = generate(state, record, generator_with())

    assert state.generation_error_kind == "MissingFieldError"
    assert "'Name'" in state.generation_error


def test_selecting_record_clears_previous_outcome():
    record = make_record()
    state = select_template(select_record(SessionState(), record.id), "intro_1")
    state = generate(state, record, generator_with(FakeResponse(200, {"email_text": "Hi"})))
    assert state.draft is not None

    state = select_record(state, "rec2")

    assert state.draft is None
    assert state.generation_error is None
    assert state.selected_template == "intro_1"


def test_selecting_template_clears_previous_error():
    state = SessionState(generation_error="boom", generation_error_kind="ServerError")

    state = select_template(state, "follow_up")

    assert state.generation_error is None
    assert state.generation_error_kind is None


def test_reset_matches_session_start():
    state = SessionState(
        catalog={"a": "desc"},
        selected_record_id="rec1",
        selected_template="a",
        generation_error="boom",
    )

    assert reset_session(state) == SessionState(catalog={"a": "desc"}, selected_record_id="rec1")


def test_can_generate_requires_selection_and_idle():
    assert not can_generate(SessionState())
    assert not can_generate(SessionState(selected_record_id="rec1"))
    assert can_generate(SessionState(selected_record_id="rec1", selected_template="a"))
    assert not can_generate(
        SessionState(selected_record_id="rec1", selected_template="a", is_generating=True)
    )
