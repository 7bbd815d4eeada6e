from __future__ import annotations

import asyncio
import uuid

from domain.models import UserSession
from domain.ports import ConfigProviderPort


class ProfileIdentityProvider:
    """
    Local implementation of ``IdentityProviderPort`` backed by profile.json.

    The uid is taken from the profile when present, otherwise derived from
    the email address so that it is stable across sign-ins.
    """

    def __init__(self, config_provider: ConfigProviderPort) -> None:
        self._config_provider = config_provider
        self._user: UserSession | None = None

    def current_user(self) -> UserSession | None:
        return self._user

    async def sign_in(self) -> UserSession:
        profile = await asyncio.to_thread(self._config_provider.get_profile)
        email = profile.email.strip()
        if not email:
            raise ValueError("profile.json has no email to sign in with")
        uid = profile.uid or uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.lower()}").hex
        self._user = UserSession(
            uid=uid,
            display_name=profile.full_name or None,
            email=email,
            photo_url=profile.photo_url,
        )
        return self._user

    async def sign_out(self) -> None:
        self._user = None
