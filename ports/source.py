from __future__ import annotations

from typing import Any, Literal, Protocol


SourceKind = Literal["http", "file"]


class SeedSourcePort(Protocol):
    source_name: str
    kind: SourceKind

    def fetch(self) -> Any:
        ...
