from __future__ import annotations

import logging
from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from hotel_booking.core.config import get_settings

logger = logging.getLogger(__name__)


class TurnstileError(RuntimeError):
    """Turnstile verification could not be completed."""


class TurnstileVerifier:
    def __init__(
        self,
        *,
        secret: str | None = None,
        verify_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self._secret = (secret if secret is not None else settings.turnstile_secret_key).strip()
        self._verify_url = verify_url or str(settings.turnstile_verify_url)
        self._client = client or httpx.AsyncClient(timeout=timeout or settings.http_timeout)

    def is_configured(self) -> bool:
        return bool(self._secret)

    async def close(self) -> None:
        await self._client.aclose()

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        if not self.is_configured():
            logger.warning("TURNSTILE_SECRET_KEY missing, skipping verification (dev mode)")
            return True

        form = {"secret": self._secret, "response": token or ""}
        if remote_ip:
            form["remoteip"] = remote_ip

        try:
            payload = await self._request(form)
        except TurnstileError as exc:
            logger.error("Turnstile verification error: %s", exc)
            return False

        success = bool(payload.get("success"))
        if not success:
            logger.info("Turnstile rejected token: %s", payload.get("error-codes") or [])
        return success

    async def _request(self, form: dict[str, str]) -> dict[str, Any]:
        try:
            async for attempt in AsyncRetrying(
                reraise=True,
                stop=stop_after_attempt(3),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception_type(httpx.TransportError),
            ):
                with attempt:
                    response = await self._client.post(self._verify_url, data=form)
                    response.raise_for_status()
                    return self._safe_json(response)
        except httpx.HTTPError as exc:
            raise TurnstileError(str(exc)) from exc
        return {}

    @staticmethod
    def _safe_json(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}


__all__ = ["TurnstileVerifier", "TurnstileError"]
