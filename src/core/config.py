"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/directorio) y la CLI lean config de forma
  consistente.

Importante:
- Los servicios del Core NO leen `AppSettings` por su cuenta: reciben
  parámetros explícitos. Las políticas del dominio exponen `from_settings`
  para traducir esta configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BANNED_WORDS: tuple[str, ...] = (
    "password",
    "passw0rd",
    "welcome",
    "admin",
    "letmein",
    "qwerty",
    "secret",
    "login",
    "changeme",
    "default",
    "summer",
    "winter",
    "spring",
    "autumn",
    "monkey",
    "dragon",
)

DEFAULT_SPECIAL_CHARS = "!#$%&*+-=?@^_~"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "acctsmith"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "acctsmith"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "acctsmith"
    return Path.home() / ".config" / "acctsmith"


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


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Valores `None` se ignoran (no borran entradas existentes).
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# acctsmith user config (.env)"]
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
        env_prefix="ACCTSMITH_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    # Identificadores
    identifier_prefix: str = Field(
        default="ex-",
        max_length=8,
        description="Prefijo fijo de los identificadores derivados.",
    )
    identifier_max_length: int = Field(
        default=11,
        ge=4,
        le=64,
        description="Longitud máxima del identificador final (incluye sufijo).",
    )
    surname_chars: int = Field(
        default=7,
        ge=1,
        le=32,
        description="Caracteres del apellido que entran en el candidato base.",
    )
    fold_accents: bool = Field(
        default=True,
        description="Quitar diacríticos (NFKD) antes de derivar el identificador.",
    )
    resolve_max_attempts: int = Field(
        default=9999,
        ge=1,
        description="Cota de sufijos numéricos probados por el resolver.",
    )

    # Passwords
    password_min_length: int = Field(default=14, ge=2, le=256)
    password_max_length: int = Field(default=20, ge=2, le=256)
    password_special_window_end: int = Field(
        default=7,
        ge=2,
        description="Última posición (1-indexada) donde se admiten caracteres especiales.",
    )
    password_special_chars: str = Field(
        default=DEFAULT_SPECIAL_CHARS,
        min_length=1,
        description="Conjunto fijo de signos de puntuación de la clase Special.",
    )
    password_max_attempts: int = Field(
        default=1000,
        ge=1,
        description="Reconstrucciones máximas antes de ConstraintUnsatisfiable.",
    )

    # Word list / passphrases
    word_list_path: Path | None = Field(
        default=None,
        description="Ruta configurada a la lista de palabras (una por línea).",
    )
    word_list_pattern: str = Field(
        default="*wordlist*.txt",
        min_length=1,
        description="Patrón glob para descubrir una lista cuando la ruta no existe.",
    )
    word_list_search_root: Path | None = Field(
        default=None,
        description="Directorio de búsqueda (por defecto, el cwd).",
    )
    word_list_recursive: bool = Field(
        default=True,
        description="Buscar la lista de forma recursiva bajo el directorio raíz.",
    )
    word_list_encoding: str = Field(default="utf-8", min_length=1)
    passphrase_min_length: int = Field(default=20, ge=1, le=1024)
    passphrase_iterations: int = Field(default=5, ge=0, le=1000)
    passphrase_max_word_attempts: int = Field(default=1000, ge=1)
    banned_words: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BANNED_WORDS),
        description="Subcadenas prohibidas (case-insensitive) en las palabras del passphrase.",
    )

    # Directorio externo (existence-check)
    directory_base_url: str | None = Field(
        default=None,
        description="Endpoint HTTP de lookup: GET <base>/<id> -> 200 existe, 404 libre.",
    )
    directory_token: str | None = Field(
        default=None,
        description="Bearer token opcional para el endpoint de directorio.",
    )
    directory_snapshot_path: Path | None = Field(
        default=None,
        description="Snapshot local de identificadores existentes (JSON o texto).",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="acctsmith/0.1 (+https://local)",
        min_length=1,
    )

    # Logging
    log_level: str = Field(default="WARNING", min_length=1)
    log_format: Literal["rich", "json"] = Field(default="rich")
