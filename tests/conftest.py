"""Shared fixtures: a fresh store (and tracker) per test."""

import pytest

from dailyspend.audit import ActivityLogger
from dailyspend.config import StorageSettings
from dailyspend.services.storage import InMemoryRecordStore, JsonFileRecordStore
from dailyspend.tracker import ExpenseTracker


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.calls = []

    def _record(self, level, event, **kwargs):
        self.calls.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    @property
    def event_types(self):
        return [kwargs["event_type"] for _, _, kwargs in self.calls]


@pytest.fixture
def storage_settings(tmp_path):
    return StorageSettings(backend="json", data_dir=tmp_path, seed_default_categories=False)


@pytest.fixture(params=["memory", "json"])
def store(request, storage_settings):
    """Every store contract test runs against both backends."""
    if request.param == "memory":
        return InMemoryRecordStore()
    return JsonFileRecordStore(settings=storage_settings)


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def tracker(recording_logger):
    return ExpenseTracker(InMemoryRecordStore(), ActivityLogger(recording_logger))
