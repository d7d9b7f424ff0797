"""Services package."""

from dailyspend.services.storage import (
    DEFAULT_CATEGORIES,
    CollectionRecordStore,
    InMemoryRecordStore,
    JsonFileRecordStore,
    RecordStoreInterface,
    StorageError,
    ValidationError,
)
from dailyspend.services.transfer import (
    CSV_HEADER,
    export_csv,
    export_filename,
    import_csv,
)

__all__ = [
    # Storage services
    "DEFAULT_CATEGORIES",
    "CollectionRecordStore",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "RecordStoreInterface",
    "StorageError",
    "ValidationError",
    # CSV transfer
    "CSV_HEADER",
    "export_csv",
    "export_filename",
    "import_csv",
]
