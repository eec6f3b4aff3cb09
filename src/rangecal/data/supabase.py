from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from supabase import Client, create_client

from ..config.settings import SupabaseSettings

logger = logging.getLogger(__name__)


class SupabaseNotInitializedError(RuntimeError):
    """Raised when a query needs the Supabase client but URL or anon key are not set."""


class SupabaseSessionMissingError(RuntimeError):
    """Raised when a user-scoped query runs without a signed-in session."""


@dataclass
class SupabaseGateway:
    """Lazily built Supabase client plus the session whose user owns the events.

    The session either comes from the presentation layer through
    :meth:`set_session` or is restored from the tokens in the settings.
    """

    settings: SupabaseSettings
    _client: Optional[Client] = field(default=None, repr=False)
    _session: Optional[Any] = field(default=None, repr=False)

    @property
    def client(self) -> Client:
        if self._client is None:
            if not self.settings.is_configured:
                raise SupabaseNotInitializedError("Supabase settings are missing URL or anon key.")
            self._client = create_client(self.settings.url, self.settings.anon_key)
        return self._client

    def set_session(self, session: Any) -> None:
        self._session = session

    def clear_session(self) -> None:
        self._session = None

    def restore_session(self) -> bool:
        """Sign in with the access and refresh tokens from the settings, if any."""

        if not (self.settings.is_configured and self.settings.has_tokens):
            return False
        response = self.client.auth.set_session(self.settings.access_token, self.settings.refresh_token)
        self._session = getattr(response, "session", None)
        if self._session is None:
            logger.warning("Supabase did not return a session for the configured tokens")
            return False
        logger.info("Restored the Supabase session of user %s", self.user_id)
        return True

    @property
    def user_id(self) -> str:
        if self._session is None:
            raise SupabaseSessionMissingError("Supabase session is not available.")
        identifier = getattr(getattr(self._session, "user", None), "id", None)
        if not identifier:
            raise SupabaseSessionMissingError("Supabase session has no user id.")
        return str(identifier)

    def is_ready(self) -> bool:
        return self.settings.is_configured and self._session is not None

    def table(self, name: str):
        return self.client.table(name)
