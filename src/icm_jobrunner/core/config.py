"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Servidor, credenciales y tiempos de espera se leen de forma consistente
  tanto desde la librería como desde la CLI.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import set_key
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from icm_jobrunner.core.domain.models import DEFAULT_END_STATES, Server, ServerProtocol, User

APP_DIR_NAME = "icm-jobrunner"
ENV_PREFIX = "ICM_JOBRUNNER_"
ENV_FILE_HEADER = "# icm-jobrunner user config (.env)"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores se guardan siempre entre comillas (python-dotenv), así que
    espacios, `#` y comillas dentro de un password se leen tal cual.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    if not env_path.exists():
        env_path.write_text(ENV_FILE_HEADER + "\n", encoding="utf-8")

    for key, value in values.items():
        if value is None:
            continue
        set_key(env_path, key, value, quote_mode="always", encoding="utf-8")
    return env_path


class JobRunnerSettings(BaseSettings):
    """Configuración central del runner.

    Las credenciales vacías son válidas aquí; se rechazan como
    `ConfigurationError` justo antes de la primera petición.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    protocol: ServerProtocol = Field(
        default=ServerProtocol.HTTPS,
        description="Protocolo del servidor ICM (http/https).",
    )
    host: str = Field(
        default="localhost",
        min_length=1,
        description="Host del servidor ICM.",
    )
    port: int = Field(
        default=443,
        ge=1,
        le=65535,
        description="Puerto del servidor ICM.",
    )
    domain: str = Field(
        default="SLDSystem",
        min_length=1,
        description="Dominio ICM al que pertenece el job.",
    )
    server_group: str = Field(
        default="BOS",
        min_length=1,
        description="Server group ICM (p.ej. BOS, WFS).",
    )

    username: str = Field(
        default="",
        description="Usuario SMC con permisos para lanzar jobs.",
    )
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Password del usuario SMC.",
    )

    timeout_ms: int = Field(
        default=600_000,
        gt=0,
        description="Espera máxima del polling hasta un estado final (ms).",
    )
    poll_interval_ms: int = Field(
        default=15_000,
        gt=0,
        description="Intervalo fijo entre consultas de estado (ms).",
    )
    end_states: frozenset[str] = Field(
        default=DEFAULT_END_STATES,
        description="Estados que terminan el polling.",
    )

    insecure_ssl: bool = Field(
        default=False,
        description="Aceptar cualquier certificado y hostname (solo servidores de test).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de log (DEBUG, INFO, WARNING, ERROR).",
    )
    json_logs: bool = Field(
        default=False,
        description="Logs en JSON (CI) en lugar de consola.",
    )

    @field_validator("end_states")
    @classmethod
    def _end_states_not_empty(cls, value: frozenset[str]) -> frozenset[str]:
        if not value:
            raise ValueError("end_states must contain at least one status")
        return value

    def server(self) -> Server:
        return Server(protocol=self.protocol, host=self.host, port=self.port)

    def user(self) -> User:
        return User(name=self.username, password=self.password)
