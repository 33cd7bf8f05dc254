"""Fixtures for key resolution tests: in-memory loaders and a stub factory."""

import asyncio
from collections.abc import Callable, Sequence

import pytest

from realm_keys.crypto.types import KeyDescriptor, KeyStatus, KeyUse
from realm_keys.keys.source import ComponentRecord


class StaticKeySource:
    """Key source returning a fixed list of descriptors."""

    def __init__(self, record: ComponentRecord, keys: list[KeyDescriptor]) -> None:
        self.record = record
        self.keys = keys
        self.enumerations = 0
        self.closed = False

    def get_keys(self) -> list[KeyDescriptor]:
        self.enumerations += 1
        return list(self.keys)

    def close(self) -> None:
        self.closed = True


class RecordingFactory:
    """Builds StaticKeySources from ``config["keys"]`` and records every call.

    A record whose config has ``fail: True`` raises instead.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.created: list[StaticKeySource] = []

    def __call__(self, record: ComponentRecord) -> StaticKeySource:
        self.calls.append(record.id)
        if record.config.get("fail"):
            raise RuntimeError(f"cannot load {record.id}")
        keys = [
            KeyDescriptor(
                kid=spec["kid"],
                use=KeyUse(spec.get("use", "sig")),
                algorithms=frozenset(spec.get("algorithms", ["RS256"])),
                status=KeyStatus(spec.get("status", "ACTIVE")),
                provider_id=record.id,
                provider_priority=record.priority,
                public_key=spec.get("public_key"),
                secret_key=spec.get("secret_key"),
            )
            for spec in record.config.get("keys", [])
        ]
        source = StaticKeySource(record, keys)
        self.created.append(source)
        return source


class InMemoryLoader:
    """Component loader over a dict, yielding to the loop on every call."""

    def __init__(self, components: dict[str, Sequence[ComponentRecord]]) -> None:
        self.components = components
        self.calls: list[str] = []

    async def __call__(self, realm_id: str) -> list[ComponentRecord]:
        self.calls.append(realm_id)
        await asyncio.sleep(0)
        return list(self.components.get(realm_id, []))


def component(
    component_id: str,
    *keys: dict,
    realm_id: str = "realm-1",
    priority: int = 0,
    fail: bool = False,
) -> ComponentRecord:
    """Build a component record whose keys are described by dicts."""
    config: dict = {"keys": list(keys)}
    if fail:
        config["fail"] = True
    return ComponentRecord(
        id=component_id,
        realm_id=realm_id,
        name=component_id,
        provider_id="static",
        priority=priority,
        config=config,
    )


@pytest.fixture
def key_factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def make_component() -> Callable[..., ComponentRecord]:
    return component


@pytest.fixture
def make_loader() -> Callable[..., InMemoryLoader]:
    return InMemoryLoader
