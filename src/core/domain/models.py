"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta en el borde (Reading/Media/TagUpdate) antes de
  tocar la red.
- Las entidades remotas conservan campos desconocidos (`extra="allow"`): el
  cliente no pretende mapear cada campo que devuelve la API.

Nota:
- Estos modelos describen *qué* se envía/recibe, no *cómo* viaja por HTTP.
"""

from __future__ import annotations

import mimetypes
from datetime import datetime
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class Reading(BaseModel):
    """Parámetros opcionales de lectura (selección de campos, paginación, filtros).

    Solo se aceptan las opciones de la lista; cualquier otra se rechaza al
    construir el objeto.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    fields: list[str] | None = Field(
        default=None,
        description="Campos a devolver (se envían separados por coma).",
    )
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    since: datetime | int | str | None = Field(
        default=None,
        description="Inicio del rango temporal (datetime -> unix seconds).",
    )
    until: datetime | int | str | None = Field(default=None)
    locale: str | None = Field(default=None, min_length=2)
    with_location: bool | None = Field(
        default=None,
        description="Solo objetos con ubicación (`with=location`).",
    )
    filter: str | None = Field(default=None, min_length=1)
    metadata: bool | None = Field(
        default=None,
        description="Incluye metadata de conexiones (`metadata=1`).",
    )

    def to_query(self) -> dict[str, str]:
        """Parámetros de query listos para el transporte (solo los definidos)."""

        out: dict[str, str] = {}
        joined = ",".join(f.strip() for f in self.fields or [] if f.strip())
        if joined:
            out["fields"] = joined
        if self.limit is not None:
            out["limit"] = str(self.limit)
        if self.offset is not None:
            out["offset"] = str(self.offset)
        if self.since is not None:
            out["since"] = _time_param(self.since)
        if self.until is not None:
            out["until"] = _time_param(self.until)
        if self.locale:
            out["locale"] = self.locale
        if self.with_location:
            out["with"] = "location"
        if self.filter:
            out["filter"] = self.filter
        if self.metadata:
            out["metadata"] = "1"
        return out


def _time_param(value: datetime | int | str) -> str:
    if isinstance(value, datetime):
        return str(int(value.timestamp()))
    return str(value)


class Media(BaseModel):
    """Contenido binario a subir (foto/vídeo).

    El invocador lo entrega al transporte como parte multipart `source` y no
    guarda referencia tras la llamada.
    """

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., min_length=1, repr=False)
    filename: str | None = Field(default=None, min_length=1)
    mime_type: str | None = Field(default=None)

    @classmethod
    def from_path(cls, path: Path | str) -> "Media":
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(content=path.read_bytes(), filename=path.name, mime_type=mime_type)

    def as_file(self) -> tuple[str, bytes, str]:
        return (
            self.filename or "source",
            self.content,
            self.mime_type or "application/octet-stream",
        )


class TagUpdate(BaseModel):
    """Carga de una etiqueta sobre una foto (usuario y/o texto + posición %)."""

    model_config = ConfigDict(frozen=True)

    to: str | None = Field(default=None, min_length=1, description="ID del usuario etiquetado.")
    tag_text: str | None = Field(default=None, min_length=1)
    x: float | None = Field(default=None, ge=0, le=100)
    y: float | None = Field(default=None, ge=0, le=100)

    @model_validator(mode="after")
    def _require_target(self) -> "TagUpdate":
        if self.to is None and self.tag_text is None:
            raise ValueError("TagUpdate requires 'to' or 'tag_text'")
        return self

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class GraphEntity(BaseModel):
    """Base de las entidades remotas: `id` + campos extra conservados."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., min_length=1)


class IdName(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None


class Photo(GraphEntity):
    name: str | None = None
    from_: IdName | None = Field(default=None, alias="from")
    picture: str | None = None
    source: str | None = None
    height: int | None = None
    width: int | None = None
    images: list[dict[str, Any]] = Field(default_factory=list)
    link: str | None = None
    icon: str | None = None
    place: IdName | None = None
    album: IdName | None = None
    created_time: str | None = None
    updated_time: str | None = None


class Video(GraphEntity):
    title: str | None = None
    description: str | None = None
    from_: IdName | None = Field(default=None, alias="from")
    picture: str | None = None
    source: str | None = None
    embed_html: str | None = None
    icon: str | None = None
    length: float | None = None
    permalink_url: str | None = None
    created_time: str | None = None
    updated_time: str | None = None


class Comment(GraphEntity):
    from_: IdName | None = Field(default=None, alias="from")
    message: str | None = None
    like_count: int | None = None
    can_remove: bool | None = None
    created_time: str | None = None


class Like(GraphEntity):
    name: str | None = None
    category: str | None = None
    created_time: str | None = None


class Tag(BaseModel):
    """Etiqueta sobre una foto; la API no siempre devuelve `id` (tags de texto)."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    x: float | None = None
    y: float | None = None
    created_time: str | None = None


class Cursors(BaseModel):
    before: str | None = None
    after: str | None = None


class Paging(BaseModel):
    model_config = ConfigDict(extra="allow")

    previous: str | None = None
    next: str | None = None
    cursors: Cursors | None = None


T = TypeVar("T", bound=BaseModel)


class ResponseList(BaseModel, Generic[T]):
    """Página de resultados: `data` en el orden del servidor + `paging` opcional."""

    data: list[T] = Field(default_factory=list)
    paging: Paging | None = None

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> T:
        return self.data[index]

    @property
    def next_cursor(self) -> str | None:
        if self.paging and self.paging.cursors:
            return self.paging.cursors.after
        return None

    @property
    def previous_cursor(self) -> str | None:
        if self.paging and self.paging.cursors:
            return self.paging.cursors.before
        return None
