"""Per-realm, lazily built and memoized list of key sources."""

import asyncio
import logging
import threading
from collections.abc import Sequence
from concurrent.futures import Future
from contextlib import ExitStack

from realm_keys.keys.errors import NoActiveKeyError
from realm_keys.keys.failsafe import Fallback, default_fallbacks
from realm_keys.keys.rules import find_active_key, sort_components
from realm_keys.keys.source import ComponentLoader, KeySource, KeySourceFactory

logger = logging.getLogger(__name__)


class ProviderCache:
    """Builds each realm's ordered key sources once and reuses them.

    Configured sources come first, sorted by priority then id; failsafe
    sources are appended for every baseline capability the configured
    sources leave without an active key.

    The cache may be shared by request handlers on different threads, each
    running its own event loop. The first caller for a realm owns the build
    and publishes it through a ``concurrent.futures.Future``; every other
    caller, on any thread or loop, awaits that future. The guard lock is
    held only for dictionary updates, never across an ``await``, so a slow
    build blocks nobody outside its own realm.
    """

    def __init__(
        self,
        loader: ComponentLoader,
        factory: KeySourceFactory,
        *,
        fallbacks: Sequence[Fallback] | None = None,
        exit_stack: ExitStack | None = None,
    ) -> None:
        self._loader = loader
        self._factory = factory
        self._fallbacks = (
            list(fallbacks) if fallbacks is not None else default_fallbacks()
        )
        self._exit_stack = exit_stack
        self._guard = threading.Lock()
        self._providers: dict[str, list[KeySource]] = {}
        self._pending: dict[str, Future[list[KeySource]]] = {}

    def __contains__(self, realm_id: str) -> bool:
        return realm_id in self._providers

    async def get_sources(self, realm_id: str) -> list[KeySource]:
        """Return the realm's ordered key sources, building them on first use."""
        providers = self._providers.get(realm_id)
        if providers is not None:
            return providers

        with self._guard:
            providers = self._providers.get(realm_id)
            if providers is not None:
                return providers
            pending = self._pending.get(realm_id)
            if pending is None:
                build: Future[list[KeySource]] = Future()
                self._pending[realm_id] = build

        if pending is not None:
            return await asyncio.wrap_future(pending)

        try:
            providers = await self._build(realm_id)
        except BaseException as exc:
            with self._guard:
                del self._pending[realm_id]
            if isinstance(exc, Exception):
                build.set_exception(exc)
            else:
                build.cancel()
            raise

        with self._guard:
            self._providers[realm_id] = providers
            del self._pending[realm_id]
        build.set_result(providers)
        return providers

    async def _build(self, realm_id: str) -> list[KeySource]:
        records = sort_components(await self._loader(realm_id))
        providers: list[KeySource] = []
        for record in records:
            try:
                provider = self._factory(record)
            except Exception:
                logger.exception(
                    "Failed to load key provider %s for realm %s", record.id, realm_id
                )
                continue
            self._enlist(provider)
            providers.append(provider)

        for fallback in self._fallbacks:
            try:
                find_active_key(providers, realm_id, fallback.use, fallback.algorithm)
            except NoActiveKeyError:
                logger.warning(
                    "No active %s key for realm %s, adding failsafe provider",
                    fallback.algorithm,
                    realm_id,
                )
                providers.append(fallback.create())
        return providers

    def _enlist(self, provider: KeySource) -> None:
        close = getattr(provider, "close", None)
        if self._exit_stack is not None and callable(close):
            self._exit_stack.callback(close)
