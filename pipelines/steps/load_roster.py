from __future__ import annotations

from pipelines.runner import RunContext
from services.roster_store import RosterStore


class LoadRoster:
    def __init__(self, store: RosterStore) -> None:
        self.store = store

    def run(self, ctx: RunContext) -> RunContext:
        outcome = self.store.load()
        if outcome.error is not None:
            ctx.errors.append(outcome.error)
        ctx.records = self.store.records
        ctx.meta["loaded_records"] = len(ctx.records)
        return ctx
