"""Read-only access to per-realm key provider configuration."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from realm_keys.db.models_components import KeyComponentEntity
from realm_keys.keys.source import ComponentRecord

KEY_PROVIDER_TYPE = "keys"


async def list_key_components(
    session: AsyncSession,
    realm_id: str,
    provider_type: str = KEY_PROVIDER_TYPE,
) -> list[ComponentRecord]:
    """Return the realm's key provider components ordered by id."""
    stmt = (
        select(KeyComponentEntity)
        .where(
            KeyComponentEntity.realm_id == realm_id,
            KeyComponentEntity.provider_type == provider_type,
        )
        .order_by(KeyComponentEntity.id)
    )
    result = await session.execute(stmt)
    return [ComponentRecord.model_validate(e) for e in result.scalars().all()]


class ComponentStore:
    """Component loader that opens a short-lived session per realm build."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider_type: str = KEY_PROVIDER_TYPE,
    ) -> None:
        self._session_factory = session_factory
        self._provider_type = provider_type

    async def __call__(self, realm_id: str) -> list[ComponentRecord]:
        async with self._session_factory() as session:
            return await list_key_components(session, realm_id, self._provider_type)
