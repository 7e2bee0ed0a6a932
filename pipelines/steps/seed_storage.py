from __future__ import annotations

from pipelines.runner import RunContext
from services.seed_loader import SeedLoader


class SeedStorage:
    def __init__(self, loader: SeedLoader) -> None:
        self.loader = loader

    def run(self, ctx: RunContext) -> RunContext:
        result = self.loader.run()
        ctx.meta["seed_status"] = result.status
        ctx.meta["seeded_records"] = result.count
        if result.error is not None:
            ctx.errors.append(result.error)
        return ctx
