from .storage import KeyValueStoragePort
from .source import SeedSourcePort

__all__ = [
    "KeyValueStoragePort",
    "SeedSourcePort",
]
