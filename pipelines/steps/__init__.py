from .seed_storage import SeedStorage
from .load_roster import LoadRoster

__all__ = [
    "SeedStorage",
    "LoadRoster",
]
