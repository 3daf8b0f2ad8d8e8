"""Errores del dominio.

Por qué solo dos tipos:
- El llamador solo necesita distinguir "no hubo respuesta" de "hubo respuesta
  pero la API la rechazó"; decidir si reintentar es responsabilidad suya.
"""

from __future__ import annotations

from typing import Any


class GraphError(Exception):
    """Base de todos los errores devueltos por el cliente."""


class ServiceUnavailable(GraphError):
    """No se recibió respuesta (red caída, timeout, conexión rechazada)."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class RequestRejected(GraphError):
    """Se recibió respuesta pero indica fallo.

    Conserva tal cual el código/mensaje remoto (`error.message`, `error.code`,
    `error.type`, `error.error_subcode`, `error.fbtrace_id`).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: int | None = None,
        error_type: str | None = None,
        error_subcode: int | None = None,
        fbtrace_id: str | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.error_type = error_type
        self.error_subcode = error_subcode
        self.fbtrace_id = fbtrace_id
        self.payload = payload

    def __str__(self) -> str:
        parts = [f"HTTP {self.status_code}"]
        if self.error_type:
            parts.append(self.error_type)
        if self.code is not None:
            parts.append(f"code={self.code}")
        return f"{self.message} ({', '.join(parts)})"
