from jobnexus.services.storage import (
    DuplicateRecordError,
    MemStorage,
    SqlStorage,
    Storage,
    build_storage,
    get_storage,
)
from jobnexus.services.seed import seed_demo_data

__all__ = [
    "DuplicateRecordError",
    "MemStorage",
    "SqlStorage",
    "Storage",
    "build_storage",
    "get_storage",
    "seed_demo_data",
]
