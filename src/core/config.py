"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/deserializer) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "graph-media"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "graph-media"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "graph-media"
    return Path.home() / ".config" / "graph-media"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# graph-media user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPH_MEDIA_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    graph_base_url: str = Field(
        default="https://graph.facebook.com",
        min_length=8,
        description="Base URL de la Graph API.",
    )
    video_base_url: str = Field(
        default="https://graph-video.facebook.com",
        min_length=8,
        description="Base URL para subidas de vídeo.",
    )
    api_version: str | None = Field(
        default=None,
        description="Versión de la API (p.ej. 'v19.0'); se antepone al path si está definida.",
    )
    access_token: str | None = Field(
        default=None,
        description="Access token ya obtenido; se envía como bearer por el transporte.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="graph-media/0.1",
        min_length=1,
        description="User-Agent para las peticiones.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )

    def base_url_for(self, upload_host: str | None = None) -> str:
        """URL base (sin '/' final) incluyendo la versión si se configuró."""

        base = self.video_base_url if upload_host == "video" else self.graph_base_url
        base = base.rstrip("/")
        if self.api_version:
            base = f"{base}/{self.api_version.strip('/')}"
        return base
