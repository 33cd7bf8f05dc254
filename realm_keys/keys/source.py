"""Key source capability and the configuration records sources are built from."""

from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from realm_keys.crypto.types import KeyDescriptor


class ComponentRecord(BaseModel):
    """A realm's persisted configuration for one key source."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    realm_id: str
    name: str = ""
    provider_id: str
    provider_type: str = "keys"
    priority: int = 0
    config: dict[str, Any] = Field(default_factory=dict)


@runtime_checkable
class KeySource(Protocol):
    """Something that enumerates its current keys on demand."""

    def get_keys(self) -> Iterable[KeyDescriptor]:
        """Return fresh descriptors, in the source's own order."""
        ...


ComponentLoader = Callable[[str], Awaitable[Sequence[ComponentRecord]]]
KeySourceFactory = Callable[[ComponentRecord], KeySource]
