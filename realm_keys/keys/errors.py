"""Exceptions raised by key resolution."""

from realm_keys.crypto.types import KeyUse


class KeyResolutionError(Exception):
    """Base class for key resolution failures."""


class NoActiveKeyError(KeyResolutionError, LookupError):
    """No active key matches the requested use and algorithm in a realm."""

    def __init__(self, realm_id: str, use: KeyUse, algorithm: str) -> None:
        super().__init__(
            f"Failed to find key: realm={realm_id} use={use} algorithm={algorithm}"
        )
        self.realm_id = realm_id
        self.use = use
        self.algorithm = algorithm
