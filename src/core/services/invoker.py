"""Invocador genérico de endpoints.

Every public facade method ends up here: an operation descriptor plus an
optional resource id, reading options, extra params and body become one
`GraphRequest`, which is sent exactly once through the injected transport and
decoded by the injected deserializer.

The invoker keeps no state between calls, so a single instance can be shared
by any number of concurrent tasks.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping
from urllib.parse import quote

from core.config import AppSettings
from core.domain.errors import GraphError
from core.domain.models import Media, Reading, TagUpdate
from core.domain.operations import OperationDescriptor
from core.interfaces.transport import Deserializer, GraphRequest, Transport

logger = logging.getLogger(__name__)

_QUERY_METHODS = frozenset({"GET", "DELETE"})


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _clean(values: Mapping[str, Any] | None) -> dict[str, str]:
    if not values:
        return {}
    return {key: _stringify(value) for key, value in values.items() if value is not None}


def resolve_path(operation: OperationDescriptor, resource_id: str | None) -> str:
    """Sustituye `{id}` en la plantilla (solo percent-encoding estándar)."""

    if not operation.needs_id:
        return operation.path_template

    if resource_id is None:
        resource_id = operation.default_id
    if resource_id is None or not str(resource_id).strip():
        raise ValueError(f"{operation.name}: resource id must be a non-empty string")

    return operation.path_template.replace("{id}", quote(str(resource_id), safe=""))


class EndpointInvoker:
    """Construye, envía y decodifica una petición por llamada."""

    def __init__(
        self,
        transport: Transport,
        deserializer: Deserializer,
        settings: AppSettings | None = None,
    ) -> None:
        self._transport = transport
        self._deserializer = deserializer
        self._settings = settings or AppSettings()

    def build_request(
        self,
        operation: OperationDescriptor,
        resource_id: str | None = None,
        *,
        reading: Reading | None = None,
        params: Mapping[str, Any] | None = None,
        body: Media | TagUpdate | None = None,
    ) -> GraphRequest:
        """Arma la petición sin hacer I/O (útil para inspección y tests)."""

        path = resolve_path(operation, resource_id)
        url = self._settings.base_url_for(operation.upload_host) + path
        method = operation.method.upper()

        values: dict[str, str] = _clean(operation.fixed_params)
        if reading is not None:
            values.update(reading.to_query())
        values.update(_clean(params))

        files: dict[str, tuple[str, bytes, str]] = {}
        if isinstance(body, Media):
            files["source"] = body.as_file()
        elif isinstance(body, TagUpdate):
            values.update(_clean(body.to_params()))

        if method in _QUERY_METHODS:
            if files:
                raise ValueError(f"{operation.name}: {method} requests cannot carry media")
            return GraphRequest(method=method, url=url, params=values)
        return GraphRequest(method=method, url=url, data=values, files=files)

    async def invoke(
        self,
        operation: OperationDescriptor,
        resource_id: str | None = None,
        *,
        reading: Reading | None = None,
        params: Mapping[str, Any] | None = None,
        body: Media | TagUpdate | None = None,
    ) -> Any:
        request = self.build_request(
            operation,
            resource_id,
            reading=reading,
            params=params,
            body=body,
        )
        logger.debug("%s: %s %s", operation.name, request.method, request.url)

        try:
            response = await self._transport.send(request)
            return self._deserializer.decode(operation, response)
        except GraphError as exc:
            logger.warning("%s failed: %s", operation.name, exc)
            raise
