from __future__ import annotations

from conftest import SCENARIO_SEED, StaticSource
from models import StudentRecord
from services.errors import DuplicateIdentifier, FormInvalid, RecordNotFound
from services.roster_controller import RosterController
from services.roster_store import RosterStore
from services.seed_loader import SeedLoader


def _controller(storage, payload=SCENARIO_SEED) -> RosterController:
    store = RosterStore(storage)
    controller = RosterController(store, SeedLoader(StaticSource(payload), storage))
    controller.start()
    return controller


def _submit(controller: RosterController, fields) -> None:
    for name, value in fields.items():
        controller.form.set_value(name, value)
    assert controller.on_submit().ok


def test_scenario_seed_then_search(storage):
    controller = _controller(storage)
    assert len(controller.filtered) == 1
    assert len(controller.search("999")) == 0
    assert len(controller.search("123")) == 1


def test_start_reports_seed_and_load(storage):
    store = RosterStore(storage)
    controller = RosterController(store, SeedLoader(StaticSource(SCENARIO_SEED), storage))
    ctx = controller.start()
    assert ctx.meta["seed_status"] == "seeded"
    assert ctx.meta["loaded_records"] == 1
    assert ctx.errors == []
    # Second start keeps what is stored
    ctx = RosterController(RosterStore(storage), SeedLoader(StaticSource([]), storage)).start()
    assert ctx.meta["seed_status"] == "skipped"
    assert ctx.meta["loaded_records"] == 1


def test_start_without_loader_only_loads(storage):
    ctx = RosterController(RosterStore(storage)).start()
    assert "seed_status" not in ctx.meta
    assert ctx.records == []


def test_submit_adds_and_clears_form(storage, sample_fields):
    controller = _controller(storage)
    _submit(controller, sample_fields[0])
    assert len(controller.store) == 2
    assert all(v == "" for v in controller.form.values().values())


def test_submit_invalid_form_adds_nothing(storage):
    controller = _controller(storage)
    controller.form.set_value("idNumber", "123")
    outcome = controller.on_submit()
    assert isinstance(outcome.error, FormInvalid)
    assert outcome.error.field_errors["idNumber"] == ["minlength"]
    assert controller.form.is_valid("idNumber") is True
    assert len(controller.store) == 1


def test_update_after_fill_form_replaces_selected(storage, sample_fields):
    controller = _controller(storage)
    for fields in sample_fields:
        _submit(controller, fields)
    before = controller.store.records
    target = before[2]
    controller.fill_form(target)
    assert controller.form.values() == target.fields()
    controller.form.set_value("lastName", "Changed")
    outcome = controller.save_changes()
    assert outcome.ok
    after = controller.store.records
    assert after[2].last_name == "Changed" and after[2].id == target.id
    assert [r for i, r in enumerate(after) if i != 2] == [r for i, r in enumerate(before) if i != 2]
    assert controller.selected is None
    assert controller.form.values()["lastName"] == ""


def test_delete_after_fill_form_removes_one(storage, sample_fields):
    controller = _controller(storage)
    _submit(controller, sample_fields[0])
    target = controller.store.records[0]
    controller.fill_form(target)
    assert controller.delete_student().ok
    assert len(controller.store) == 1
    assert controller.store.get(target.id) is None


def test_delete_without_match_leaves_list_and_clears(storage):
    controller = _controller(storage)
    ghost = StudentRecord.from_fields(
        {"firstName": "No", "lastName": "One", "idNumber": "0000000", "phone": "0500000000", "email": "n@o.com"}
    )
    controller.fill_form(ghost)
    outcome = controller.delete_student()
    assert isinstance(outcome.error, RecordNotFound)
    assert len(controller.store) == 1
    assert controller.selected is None
    assert controller.form.values()["firstName"] == ""


def test_save_changes_without_selection_reports_not_found(storage, sample_fields):
    controller = _controller(storage)
    for name, value in sample_fields[0].items():
        controller.form.set_value(name, value)
    outcome = controller.save_changes()
    assert isinstance(outcome.error, RecordNotFound)
    assert len(controller.store) == 1


def test_selection_without_id_resolves_by_fields(storage):
    controller = _controller(storage)
    stored = controller.store.records[0]
    legacy = StudentRecord.from_fields(stored.fields())
    assert legacy.id != stored.id
    controller.fill_form(legacy)
    assert controller.delete_student().ok
    assert len(controller.store) == 0


def test_invalid_save_clears_form_and_selection(storage):
    controller = _controller(storage)
    original = controller.store.records[0]
    controller.fill_form(original)
    controller.form.set_value("idNumber", "12")
    outcome = controller.save_changes()
    assert isinstance(outcome.error, FormInvalid)
    assert controller.selected is None
    assert all(v == "" for v in controller.form.values().values())
    assert controller.store.records == [original]


def test_submit_duplicate_resets_form(storage):
    controller = _controller(storage)
    dup = dict(SCENARIO_SEED[0], firstName="Ann", lastName="Bee")
    for name, value in dup.items():
        controller.form.set_value(name, value)
    outcome = controller.on_submit()
    assert isinstance(outcome.error, DuplicateIdentifier)
    assert all(v == "" for v in controller.form.values().values())
    assert len(controller.store) == 1


def test_stale_selection_never_hits_its_twin(storage, sample_fields):
    controller = RosterController(RosterStore(storage, enforce_unique_id_number=False))
    controller.start()
    _submit(controller, sample_fields[0])
    _submit(controller, sample_fields[0])
    first, twin = controller.store.records
    controller.fill_form(first)
    assert controller.delete_student().ok
    controller.fill_form(first)
    outcome = controller.delete_student()
    assert isinstance(outcome.error, RecordNotFound)
    assert controller.store.records == [twin]
