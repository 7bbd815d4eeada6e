"""
Reusable fakes and in-memory implementations for tests.
"""

from .fake_config_provider import InMemoryConfigProvider
from .fake_document_store import InMemoryDocumentStore, StoreUnavailableError
from .fake_identity import FakeIdentityProvider, InMemorySessionStore, RecordingLinkOpener
from .fake_runtime import (
    FixedClock,
    InMemoryLogger,
    RecordingNotifier,
    SequentialIdGenerator,
)
from .tracker_harness import DEFAULT_NOW, TrackerHarness, signed_in_harness

__all__ = [
    "InMemoryConfigProvider",
    "InMemoryDocumentStore",
    "StoreUnavailableError",
    "FakeIdentityProvider",
    "InMemorySessionStore",
    "RecordingLinkOpener",
    "FixedClock",
    "SequentialIdGenerator",
    "InMemoryLogger",
    "RecordingNotifier",
    "TrackerHarness",
    "signed_in_harness",
    "DEFAULT_NOW",
]
