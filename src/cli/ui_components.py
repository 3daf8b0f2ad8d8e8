"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en los comandos de fotos y vídeos.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import GraphError, RequestRejected
from core.domain.models import ResponseList


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en `doctor`, no en comandos de datos)."""

    title = Text("graph-media", style="bold cyan")
    subtitle = Text("Photos • Videos • Likes • Tags", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _label(entity: BaseModel) -> str:
    for attr in ("name", "title", "message"):
        value = getattr(entity, attr, None)
        if isinstance(value, str) and value:
            return value
    return ""


def build_entities_table(title: str, page: ResponseList[Any]) -> Table:
    """Tabla Rich para una página de resultados (orden del servidor)."""

    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name / Message", style="white")
    table.add_column("Created", style="magenta")

    for index, entity in enumerate(page.data, start=1):
        table.add_row(
            str(index),
            str(getattr(entity, "id", None) or "-"),
            _label(entity),
            str(getattr(entity, "created_time", None) or ""),
        )

    if page.next_cursor:
        table.caption = f"next cursor: {page.next_cursor}"
    return table


def build_entity_panel(entity: BaseModel) -> Panel:
    payload = entity.model_dump(mode="json", by_alias=True, exclude_none=True)
    body = Text(json.dumps(payload, ensure_ascii=False, indent=2))
    return Panel(body, title=Text(str(getattr(entity, "id", "")), style="bold cyan"), border_style="cyan")


def print_json(console: Console, value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
    console.print_json(json.dumps(value, ensure_ascii=False))


def print_error(console: Console, exc: GraphError) -> None:
    if isinstance(exc, RequestRejected):
        console.print(f"[red]Request rejected:[/red] {exc}")
        if exc.fbtrace_id:
            console.print(f"[dim]trace id: {exc.fbtrace_id}[/dim]")
    else:
        console.print(f"[red]Service unavailable:[/red] {exc}")
