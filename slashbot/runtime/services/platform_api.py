"""Discord HTTP API client.

For calls the gateway client does not cover, chiefly the bulk
application-command registration. Each call opens a short-lived
``aiohttp.ClientSession`` unless one is supplied.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from ..core.errors import PlatformApiError

logger = logging.getLogger(__name__)

API_BASE = "https://discord.com/api/v10"
_TIMEOUT = aiohttp.ClientTimeout(total=30)


class DiscordApi:
    def __init__(
        self,
        token: str,
        *,
        base_url: str = API_BASE,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        if not token:
            logger.error("[discord_api] Discord token not provided")
            raise ValueError("Discord token not provided")
        self._token = token.removeprefix("Bot ").strip()
        self._base_url = base_url.rstrip("/")
        self._session = session

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bot {self._token}",
            "Content-Type": "application/json",
        }

    async def call(self, endpoint: str, method: str = "GET", body: Any = None) -> Any:
        """Send one request and return the decoded JSON body.

        Empty bodies decode to ``{}``. Non-2xx responses raise
        :class:`PlatformApiError`.
        """
        url = f"{self._base_url}{endpoint}"
        logger.debug("[discord_api.call] %s %s", method, endpoint)
        if self._session is not None:
            return await self._send(self._session, method, url, body)
        async with aiohttp.ClientSession(timeout=_TIMEOUT) as session:
            return await self._send(session, method, url, body)

    async def _send(
        self, session: aiohttp.ClientSession, method: str, url: str, body: Any,
    ) -> Any:
        data = json.dumps(body) if body is not None else None
        async with session.request(method, url, data=data, headers=self.headers) as resp:
            text = await resp.text()
            if resp.status >= 400:
                logger.error(
                    "[discord_api.call] %s %s -> HTTP %d: %s", method, url, resp.status, text[:500],
                )
                raise PlatformApiError(resp.status, resp.reason or "", text)
        if not text:
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("[discord_api.call] invalid JSON from %s: %s", url, text[:200])
            raise PlatformApiError(resp.status, "Invalid JSON response", text) from exc

    # -- application commands ----------------------------------------------

    async def put_application_commands(
        self,
        application_id: str,
        payloads: list[dict[str, Any]],
        *,
        guild_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Replace the full command set (globally, or for one guild)."""
        if guild_id:
            endpoint = f"/applications/{application_id}/guilds/{guild_id}/commands"
        else:
            endpoint = f"/applications/{application_id}/commands"
        result = await self.call(endpoint, "PUT", payloads)
        return result if isinstance(result, list) else []

    # -- helpers -----------------------------------------------------------

    async def get_guild(self, guild_id: str) -> dict[str, Any]:
        logger.debug("[discord_api.get_guild] fetching guild %s", guild_id)
        return await self.call(f"/guilds/{guild_id}")

    async def get_channel(self, channel_id: str) -> dict[str, Any]:
        logger.debug("[discord_api.get_channel] fetching channel %s", channel_id)
        return await self.call(f"/channels/{channel_id}")

    async def create_role(self, guild_id: str, role: dict[str, Any]) -> dict[str, Any]:
        logger.info("[discord_api.create_role] creating role %r in guild %s", role.get("name"), guild_id)
        return await self.call(f"/guilds/{guild_id}/roles", "POST", role)

    async def create_channel(self, guild_id: str, channel: dict[str, Any]) -> dict[str, Any]:
        logger.info(
            "[discord_api.create_channel] creating channel %r in guild %s", channel.get("name"), guild_id,
        )
        return await self.call(f"/guilds/{guild_id}/channels", "POST", channel)
