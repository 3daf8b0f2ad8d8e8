"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y el access token para todas las operaciones.
- Traduce fallos de red a `ServiceUnavailable`; el resto del Core no conoce httpx.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con `MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.domain.errors import ServiceUnavailable
from core.interfaces.transport import GraphRequest, RawResponse


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - Un `transport` opcional permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.access_token:
        headers["Authorization"] = f"Bearer {settings.access_token}"
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """Implementación de `Transport` sobre httpx.

    Si se inyecta `client`, su ciclo de vida es del llamador; si no, se abre
    un cliente por petición.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    async def send(self, request: GraphRequest) -> RawResponse:
        if self._client is not None:
            return await self._send(self._client, request)
        async with build_async_client(self._settings) as client:
            return await self._send(client, request)

    async def _send(self, client: httpx.AsyncClient, request: GraphRequest) -> RawResponse:
        try:
            response = await client.request(
                request.method,
                request.url,
                params=request.params or None,
                data=request.data or None,
                files=request.files or None,
                headers=request.headers or None,
            )
        except httpx.TransportError as exc:
            raise ServiceUnavailable(
                f"{type(exc).__name__}: {exc}",
                url=request.url,
            ) from exc

        return RawResponse(
            status_code=response.status_code,
            text=response.text,
            url=str(response.url),
            headers=dict(response.headers),
        )
