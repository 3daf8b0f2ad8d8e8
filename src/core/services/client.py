"""Punto de entrada público: photos + videos sobre un único invocador.

Por qué aquí:
- El Core ensambla los adaptadores por defecto (httpx + JSON) pero acepta
  cualquier `Transport`/`Deserializer` inyectado.
"""

from __future__ import annotations

import httpx

from adapters.deserializer import JsonDeserializer
from adapters.http_client import HttpxTransport
from core.config import AppSettings
from core.interfaces.transport import Deserializer, Transport
from core.services.invoker import EndpointInvoker
from core.services.photos import PhotoMethods
from core.services.videos import VideoMethods


class GraphMediaClient(PhotoMethods, VideoMethods):
    """Cliente de los endpoints de fotos y vídeos."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: Transport | None = None,
        deserializer: Deserializer | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if transport is not None and http_client is not None:
            raise ValueError("pass either transport or http_client, not both")
        self._settings = settings or AppSettings()
        if transport is None:
            transport = HttpxTransport(self._settings, client=http_client)
        self._invoker = EndpointInvoker(
            transport,
            deserializer or JsonDeserializer(),
            self._settings,
        )

    @property
    def invoker(self) -> EndpointInvoker:
        return self._invoker
