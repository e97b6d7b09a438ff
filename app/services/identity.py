"""Identity resolution: external sign-in -> internal user id."""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.linkedin import ExternalAccount
from app.errors import BadRequestError
from app.models.user import OAuthAccount, User

logger = logging.getLogger(__name__)


class IdentityResolver:
    """
    Maps an authenticated external account to a User.

    Resolution order:
        1. A linked account already exists: returning user.
        2. An unclaimed profile holds the account's profile URL: auto-claim it.
        3. Otherwise: create a fresh, claimed profile.

    The auto-claim is a single conditional update guarded by
    ``claimed = false``, so two concurrent sign-ins cannot both claim the
    same profile.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, account: ExternalAccount) -> UUID:
        if not account.email:
            raise BadRequestError("Your LinkedIn account did not share an email address")

        result = await self.db.execute(
            select(OAuthAccount)
            .where(OAuthAccount.provider == account.provider)
            .where(OAuthAccount.provider_account_id == account.subject)
            .execution_options(populate_existing=True)
        )
        link = result.scalar_one_or_none()

        if link:
            await self._refresh_avatar(link.user_id, account)
            logger.info("Returning user %s signed in via %s", link.user_id, account.provider)
            return link.user_id

        claimed_id = await self._auto_claim(account)
        if claimed_id:
            self._link(claimed_id, account)
            await self.db.flush()
            logger.info("Auto-claimed profile %s for %s", claimed_id, account.profile_url)
            return claimed_id

        user = await self._create_user(account)
        self._link(user.id, account)
        await self.db.flush()
        logger.info("Created new profile %s for %s", user.id, account.profile_url)
        return user.id

    async def _auto_claim(self, account: ExternalAccount) -> UUID | None:
        result = await self.db.execute(
            update(User)
            .where(User.linkedin_url == account.profile_url)
            .where(User.claimed.is_(False))
            .values(email=account.email, image=account.image, claimed=True)
            .returning(User.id)
            .execution_options(synchronize_session=False)
        )
        row = result.first()
        return row[0] if row else None

    async def _create_user(self, account: ExternalAccount) -> User:
        # The URL stays with whichever profile already holds it.
        result = await self.db.execute(
            select(User.id).where(User.linkedin_url == account.profile_url)
        )
        url_taken = result.first() is not None

        user = User(
            name=account.name,
            email=account.email,
            image=account.image,
            linkedin_url=None if url_taken else account.profile_url,
            claimed=True,
        )
        self.db.add(user)
        await self.db.flush()
        return user

    def _link(self, user_id: UUID, account: ExternalAccount) -> None:
        self.db.add(
            OAuthAccount(
                user_id=user_id,
                provider=account.provider,
                provider_account_id=account.subject,
                profile_url=account.profile_url,
            )
        )

    async def _refresh_avatar(self, user_id: UUID, account: ExternalAccount) -> None:
        if account.image:
            await self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(image=account.image)
                .execution_options(synchronize_session=False)
            )


async def resolve_identity(db: AsyncSession, account: ExternalAccount) -> UUID:
    """Convenience wrapper around IdentityResolver.resolve."""
    return await IdentityResolver(db).resolve(account)
