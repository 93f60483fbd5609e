import asyncio

import pytest

from app.core.exceptions import InsertFailed
from app.models.submission_models import SubmissionDraft, SubmissionStatus, UploadMode
from app.services.submission_orchestrator import (
    ACKNOWLEDGMENT,
    GENERIC_ERROR,
    SubmissionOrchestrator,
    insert_error_message,
)


def fill(orchestrator, **fields):
    values = dict(budget="25", name="Ana", phone="555-0100")
    values.update(fields)
    for field_name, value in values.items():
        orchestrator.on_field_change(field_name, value)


@pytest.fixture
def orchestrator(storage, database):
    return SubmissionOrchestrator(storage, database)


def test_initial_state_is_idle(orchestrator):
    assert orchestrator.state.status == SubmissionStatus.IDLE
    assert orchestrator.draft == SubmissionDraft()


def test_unknown_field_is_rejected(orchestrator):
    with pytest.raises(ValueError):
        orchestrator.on_field_change("email", "a@b.c")


def test_mode_change_keeps_other_field(orchestrator, image_file):
    orchestrator.on_image_select(image_file)
    orchestrator.on_field_change("product_url", "https://shop.example/a.png")
    orchestrator.on_mode_change("url")
    orchestrator.on_mode_change(UploadMode.FILE)
    assert orchestrator.draft.image_file == image_file
    assert orchestrator.draft.product_url == "https://shop.example/a.png"


def test_validation_error_has_no_side_effects(orchestrator, storage, database):
    fill(orchestrator, product_url="https://shop.example/a.png")

    state = asyncio.run(orchestrator.on_submit())

    assert state.status == SubmissionStatus.ERROR
    assert state.reason == "missing image"
    assert state.message == "Please upload a product image"
    assert storage.uploads == []
    assert database.records == []
    assert orchestrator.draft.budget == "25"


def test_invalid_budget_never_reaches_store(orchestrator, database):
    orchestrator.on_mode_change(UploadMode.URL)
    fill(orchestrator, product_url="https://shop.example/a.png", budget="abc")

    state = asyncio.run(orchestrator.on_submit())

    assert state.reason == "invalid budget"
    assert database.records == []


def test_url_submission_inserts_trimmed_url(orchestrator, storage, database):
    orchestrator.on_mode_change(UploadMode.URL)
    fill(orchestrator, product_url="  https://shop.example/a.png ", budget="12.5")

    state = asyncio.run(orchestrator.on_submit())

    assert state.status == SubmissionStatus.SUCCESS
    assert storage.uploads == []
    [record] = database.records
    assert record.product_url == "https://shop.example/a.png"
    assert record.budget == 12.5


def test_file_submission_stores_public_url(orchestrator, storage, database, image_file):
    storage.public_url = "https://x/y.png"
    orchestrator.on_image_select(image_file)
    fill(orchestrator)

    asyncio.run(orchestrator.on_submit())

    [record] = database.records
    assert record.product_url == "https://x/y.png"


def test_empty_optional_fields_persist_as_null(orchestrator, database, image_file):
    orchestrator.on_image_select(image_file)
    fill(orchestrator, material="", comments="   ")

    asyncio.run(orchestrator.on_submit())

    row = database.records[0].model_dump()
    assert row["material"] is None
    assert row["extra_comments"] is None
    assert row["name"] == "Ana"
    assert row["phone_number"] == "555-0100"


def test_success_resets_draft_and_notifies(storage, database, image_file):
    acknowledgments = []
    orchestrator = SubmissionOrchestrator(storage, database, on_success=acknowledgments.append)
    orchestrator.on_image_select(image_file)
    fill(orchestrator, material="silk", comments="size M", product_url="https://ignored")

    state = asyncio.run(orchestrator.on_submit())

    assert state.status == SubmissionStatus.SUCCESS
    assert state.message == ACKNOWLEDGMENT
    assert acknowledgments == [ACKNOWLEDGMENT]
    assert orchestrator.draft == SubmissionDraft()
    assert not orchestrator.is_submitting


def test_success_keeps_selected_mode(orchestrator):
    orchestrator.on_mode_change(UploadMode.URL)
    fill(orchestrator, product_url="https://shop.example/a.png")

    asyncio.run(orchestrator.on_submit())

    assert orchestrator.draft == SubmissionDraft(mode=UploadMode.URL)


def test_upload_failure_keeps_draft(failing_storage, database, image_file):
    orchestrator = SubmissionOrchestrator(failing_storage, database)
    orchestrator.on_image_select(image_file)
    fill(orchestrator)

    state = asyncio.run(orchestrator.on_submit())

    assert state.status == SubmissionStatus.ERROR
    assert state.message == "Failed to upload image"
    assert state.reason is None
    assert database.records == []
    assert orchestrator.draft.image_file == image_file
    assert not orchestrator.is_submitting


@pytest.mark.parametrize(
    "code, message",
    [
        ("23505", "This submission already exists"),
        ("42P01", "Table not found. Please check your database setup"),
        ("42703", "Invalid column name. Please check the form fields"),
        ("23502", "Required field missing"),
        ("99999", "Database error: timeout"),
        (None, "Database error: timeout"),
    ],
)
def test_insert_failure_messages(storage, database, image_file, code, message):
    database.error = InsertFailed(code, "timeout")
    orchestrator = SubmissionOrchestrator(storage, database)
    orchestrator.on_image_select(image_file)
    fill(orchestrator)

    state = asyncio.run(orchestrator.on_submit())

    assert state.status == SubmissionStatus.ERROR
    assert state.message == message
    assert orchestrator.draft.image_file == image_file
    assert orchestrator.draft.name == "Ana"


def test_insert_error_message_falls_back_to_store_detail():
    assert insert_error_message(InsertFailed("XX000", "disk full")) == "Database error: disk full"


def test_error_then_retry_succeeds(storage, database):
    orchestrator = SubmissionOrchestrator(storage, database)
    orchestrator.on_mode_change(UploadMode.URL)
    fill(orchestrator, product_url="https://shop.example/a.png", phone="")

    assert asyncio.run(orchestrator.on_submit()).reason == "missing phone"

    orchestrator.on_field_change("phone", "555-0100")
    state = asyncio.run(orchestrator.on_submit())

    assert state.status == SubmissionStatus.SUCCESS
    assert len(database.records) == 1


def test_double_submit_inserts_once(orchestrator, database):
    orchestrator.on_mode_change(UploadMode.URL)
    fill(orchestrator, product_url="https://shop.example/a.png")

    async def scenario():
        database.gate = asyncio.Event()
        first = asyncio.create_task(orchestrator.on_submit())
        while not database.records:
            await asyncio.sleep(0)

        second = await orchestrator.on_submit()
        assert second.status == SubmissionStatus.SUBMITTING
        assert orchestrator.is_submitting

        database.gate.set()
        return await first

    state = asyncio.run(scenario())

    assert state.status == SubmissionStatus.SUCCESS
    assert len(database.records) == 1
    assert not orchestrator.is_submitting


def test_unexpected_error_ends_in_generic_error(storage, image_file):
    class BrokenDatabase:
        async def insert_submission(self, record):
            raise RuntimeError("bug")

    orchestrator = SubmissionOrchestrator(storage, BrokenDatabase())
    orchestrator.on_image_select(image_file)
    fill(orchestrator)

    state = asyncio.run(orchestrator.on_submit())

    assert state.status == SubmissionStatus.ERROR
    assert state.message == GENERIC_ERROR
    assert state.reason is None
    assert orchestrator.state == state
    assert not orchestrator.is_submitting
    assert orchestrator.draft.image_file == image_file
