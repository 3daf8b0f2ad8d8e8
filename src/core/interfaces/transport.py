"""Contratos de transporte y deserialización.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el invocador use httpx en producción y un fake en tests sin
  acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from core.domain.operations import OperationDescriptor


@dataclass(frozen=True)
class GraphRequest:
    """Petición HTTP completamente especificada."""

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    data: dict[str, str] = field(default_factory=dict)
    files: dict[str, tuple[str, bytes, str]] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """Respuesta sin decodificar tal como la entrega el transporte."""

    status_code: int
    text: str
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    """Ejecuta una petición.

    Reglas de diseño:
    - `send` es asíncrono porque hace I/O (HTTP).
    - Si no hay respuesta lanza `ServiceUnavailable`; nunca devuelve vacío.
    """

    async def send(self, request: GraphRequest) -> RawResponse:
        ...


@runtime_checkable
class Deserializer(Protocol):
    """Convierte la respuesta cruda en la forma declarada por la operación."""

    def decode(self, operation: OperationDescriptor, response: RawResponse) -> Any:
        ...
