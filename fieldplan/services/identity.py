"""Identity directory: who owns a schedule and who may administer all of them."""

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldplan.db.models import User
from fieldplan.schemas.user import OwnerProfile


class IdentityDirectory(Protocol):
    """Lookups the schedule store needs from the identity side."""

    async def is_administrator(self, user_id: int) -> bool: ...

    async def resolve(self, user_ids: Iterable[int]) -> dict[int, OwnerProfile]: ...

    async def search(self, text: str) -> set[int]: ...


class DatabaseIdentityDirectory:
    """Identity directory backed by the local users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_administrator(self, user_id: int) -> bool:
        """Check the administrator capability. Unknown users are not administrators."""
        result = await self.db.execute(
            select(User.is_administrator).where(User.id == user_id)
        )
        return bool(result.scalar_one_or_none())

    async def resolve(self, user_ids: Iterable[int]) -> dict[int, OwnerProfile]:
        """Map user ids to display profiles. Ids without a user are left out."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return {user.id: OwnerProfile.model_validate(user) for user in result.scalars()}

    async def search(self, text: str) -> set[int]:
        """
        Ids of users whose name or phone contains the text (case-insensitive).

        The text is matched literally: % and _ are not wildcards.
        """
        text = text.strip()
        result = await self.db.execute(
            select(User.id).where(
                or_(
                    User.name.icontains(text, autoescape=True),
                    User.phone.icontains(text, autoescape=True),
                )
            )
        )
        return set(result.scalars())
