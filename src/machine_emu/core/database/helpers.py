"""Store helpers shared by the repositories."""

from collections.abc import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from machine_emu.core.database.base import Base
from machine_emu.core.errors import ConflictError, NotFoundError


async def flush_unique(
    session: AsyncSession,
    *,
    resource: str,
    field: str,
    value: str,
) -> None:
    """Flush pending writes, translating a unique violation into ConflictError.

    The check-then-insert done by the services can race with a concurrent
    request creating the same name; the unique constraint settles it here.

    Raises:
        ConflictError: If the flush violates a unique constraint
    """
    try:
        await session.flush()
    except IntegrityError as e:
        raise ConflictError(
            f"{resource.capitalize()} {field} already exists",
            error_code=f"{resource}_exists",
            field=field,
            value=value,
        ) from e


def unique_ids(ids: Iterable[int]) -> list[int]:
    """De-duplicate ids while keeping their first-seen order."""
    return list(dict.fromkeys(ids))


async def ensure_ids_exist(
    session: AsyncSession,
    model: type[Base],
    ids: Sequence[int],
    resource: str,
) -> None:
    """Check that every id refers to an existing row of ``model``.

    Raises:
        NotFoundError: Naming the first missing id
    """
    if not ids:
        return
    pk = model.__table__.c.id
    result = await session.execute(select(pk).where(pk.in_(ids)))
    found = set(result.scalars().all())
    missing = [i for i in ids if i not in found]
    if missing:
        raise NotFoundError(
            f"{resource.capitalize()} not found",
            resource=resource,
            resource_id=str(missing[0]),
            details={"missing_ids": missing},
        )
