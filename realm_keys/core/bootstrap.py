"""Wiring for a database-backed key manager."""

from contextlib import ExitStack

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from realm_keys.core.settings import DatabaseSettings, KeySettings
from realm_keys.db.repo_components import ComponentStore
from realm_keys.keys.failsafe import default_fallbacks
from realm_keys.keys.manager import KeyManager
from realm_keys.keys.provider_cache import ProviderCache
from realm_keys.keys.source import KeySourceFactory


def create_session_factory(
    db: DatabaseSettings | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create a pooled session factory for the key component database."""
    db = db or DatabaseSettings()
    engine = create_async_engine(
        db.async_url,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
    )
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def create_key_manager(
    factory: KeySourceFactory,
    *,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    settings: KeySettings | None = None,
    exit_stack: ExitStack | None = None,
) -> KeyManager:
    """Build a KeyManager reading key components from the database.

    Without a ``session_factory`` one is created from ``DatabaseSettings``;
    the engine connects lazily, on the first realm lookup.
    """
    settings = settings or KeySettings()
    cache = ProviderCache(
        ComponentStore(session_factory or create_session_factory()),
        factory,
        fallbacks=default_fallbacks(settings),
        exit_stack=exit_stack,
    )
    return KeyManager(cache)
