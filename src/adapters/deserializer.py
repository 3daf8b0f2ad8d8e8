"""Decodificación JSON de respuestas.

Reglas:
- Status no-2xx o cuerpo con objeto `error` => `RequestRejected`, con el
  mensaje remoto intacto.
- `ack` se decide solo por el campo `success` (o un booleano JSON desnudo),
  nunca por el status HTTP.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from core.domain.errors import RequestRejected
from core.domain.models import ResponseList
from core.domain.operations import OperationDescriptor, ResultShape
from core.interfaces.transport import RawResponse


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def rejection_from(response: RawResponse, payload: Any) -> RequestRejected:
    """Construye `RequestRejected` a partir del sobre `{"error": {...}}` si existe."""

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        message = error.get("message")
        return RequestRejected(
            message if isinstance(message, str) else json.dumps(error),
            status_code=response.status_code,
            code=_int_or_none(error.get("code")),
            error_type=error.get("type") if isinstance(error.get("type"), str) else None,
            error_subcode=_int_or_none(error.get("error_subcode")),
            fbtrace_id=error.get("fbtrace_id") if isinstance(error.get("fbtrace_id"), str) else None,
            payload=payload,
        )
    if isinstance(error, str):
        return RequestRejected(error, status_code=response.status_code, payload=payload)
    return RequestRejected(
        response.text or f"HTTP {response.status_code}",
        status_code=response.status_code,
        payload=payload,
    )


class JsonDeserializer:
    """Implementación de `Deserializer` para respuestas JSON."""

    def decode(self, operation: OperationDescriptor, response: RawResponse) -> Any:
        try:
            payload = json.loads(response.text) if response.text else None
        except ValueError:
            payload = None
            if 200 <= response.status_code < 300:
                raise RequestRejected(
                    response.text,
                    status_code=response.status_code,
                ) from None

        if not 200 <= response.status_code < 300:
            raise rejection_from(response, payload)
        if isinstance(payload, dict) and "error" in payload:
            raise rejection_from(response, payload)

        try:
            return self._decode_shape(operation, response, payload)
        except ValidationError as exc:
            raise RequestRejected(
                f"{operation.name}: unexpected response shape: {exc.error_count()} error(s)",
                status_code=response.status_code,
                payload=payload,
            ) from exc

    def _decode_shape(
        self,
        operation: OperationDescriptor,
        response: RawResponse,
        payload: Any,
    ) -> Any:
        shape = operation.shape

        if shape is ResultShape.ACK:
            if isinstance(payload, bool):
                return payload
            if isinstance(payload, dict):
                return payload.get("success") is True
            return False

        if not isinstance(payload, dict):
            raise RequestRejected(
                f"{operation.name}: expected a JSON object",
                status_code=response.status_code,
                payload=payload,
            )

        if shape is ResultShape.IDENTIFIER:
            ident = payload.get("id")
            if not isinstance(ident, (str, int)) or ident == "":
                raise RequestRejected(
                    f"{operation.name}: response has no id",
                    status_code=response.status_code,
                    payload=payload,
                )
            return str(ident)

        if shape is ResultShape.URL:
            data = payload.get("data")
            url = data.get("url") if isinstance(data, dict) else payload.get("url")
            if not isinstance(url, str) or not url:
                raise RequestRejected(
                    f"{operation.name}: response has no url",
                    status_code=response.status_code,
                    payload=payload,
                )
            return url

        if operation.model is None:
            return payload
        if shape is ResultShape.COLLECTION:
            return ResponseList[operation.model].model_validate(payload)
        return operation.model.model_validate(payload)
