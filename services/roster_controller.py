from __future__ import annotations

import logging
from typing import List, Optional

from models import StudentRecord
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import LoadRoster, SeedStorage
from services.errors import FormInvalid, RecordNotFound
from services.record_form import RecordForm
from services.roster_store import Outcome, RosterStore
from services.seed_loader import SeedLoader


logger = logging.getLogger(__name__)


class RosterController:
    """Ties the form, the selection and the store together, one action per UI control."""

    def __init__(self, store: RosterStore, seed_loader: Optional[SeedLoader] = None, form: Optional[RecordForm] = None) -> None:
        self.store = store
        self.seed_loader = seed_loader
        self.form = form or RecordForm()
        self.selected: Optional[StudentRecord] = None

    def start(self) -> RunContext:
        """Seed storage (if a loader is configured), then load the roster."""
        steps = []
        if self.seed_loader is not None:
            steps.append(SeedStorage(self.seed_loader))
        steps.append(LoadRoster(self.store))
        return Pipeline(steps).run(RunContext())

    @property
    def filtered(self) -> List[StudentRecord]:
        return self.store.filtered

    def search(self, term: str) -> List[StudentRecord]:
        return self.store.search(term)

    def fill_form(self, record: StudentRecord) -> None:
        self.form.patch(record)
        self.selected = record

    def reset_form(self) -> None:
        self.form.reset()

    def _clear(self) -> None:
        self.form.reset()
        self.selected = None

    def on_submit(self) -> Outcome:
        self.form.touch_all()
        if not self.form.valid:
            # Touched errors stay visible; nothing is cleared
            error = FormInvalid(self.form.field_errors())
            logger.info(str(error), extra={"op": "add", "status": error.kind})
            return Outcome(ok=False, error=error)
        outcome = self.store.add(self.form.values())
        self.reset_form()
        return outcome

    def _selected_id(self) -> Optional[str]:
        if self.selected is None:
            return None
        if self.store.issued(self.selected.id):
            # Stale ids stay stale; they never resolve to a look-alike record
            return self.selected.id
        # Selection built outside the store: fall back to field equality
        match = self.store.find_matching(self.selected)
        return match.id if match else self.selected.id

    def save_changes(self) -> Outcome:
        self.form.touch_all()
        if not self.form.valid:
            error = FormInvalid(self.form.field_errors())
            logger.info(str(error), extra={"op": "update", "status": error.kind})
            self._clear()
            return Outcome(ok=False, error=error)
        if self.selected is None:
            outcome = Outcome(ok=False, error=RecordNotFound(None))
        else:
            outcome = self.store.update(self._selected_id(), self.form.values())
        self._clear()
        return outcome

    def delete_student(self) -> Outcome:
        if self.selected is None:
            outcome = Outcome(ok=False, error=RecordNotFound(None))
        else:
            outcome = self.store.delete(self._selected_id())
        self._clear()
        return outcome
