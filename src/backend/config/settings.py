"""Centralized application settings loaded from environment variables.

All configuration is defined once here. Other modules should import
``get_settings()`` rather than calling ``os.getenv()`` directly.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_KUSTO_COLUMNS = (
    "PreciseTimeStamp,Tenant,poolId,clusterId,cpuLoad,cpuCapacity,"
    "memoryLoad,memoryCapacity,appCapacity,currentState"
)


class Settings(BaseSettings):
    """Application-wide configuration backed by environment variables.

    Field names are **lowercased** versions of the env-var names.
    ``pydantic-settings`` maps them automatically (case-insensitive).

    Example::

        settings = Settings()  # reads .env + real env
        cluster = settings.kusto_cluster_uri
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- Azure OpenAI ------------------------------------------------------

    azure_openai_endpoint: str = ""
    """Azure OpenAI resource endpoint used by the advisor agent."""

    azure_openai_api_key: str | None = None
    """API key (None → Entra ID via ``DefaultAzureCredential``)."""

    azure_openai_deployment_name: str = "o4-mini"
    """Chat deployment used for both the query-design and analysis turns."""

    azure_openai_api_version: str | None = None
    """Optional API version override."""

    azure_client_id: str | None = None
    """Managed-identity client ID (None → system-assigned / developer login)."""

    # -- Kusto -------------------------------------------------------------

    kusto_cluster_uri: str = "https://atlaslogscp.eastus.kusto.windows.net"
    """Kusto cluster holding the pool telemetry."""

    kusto_database: str = "telemetry"
    """Telemetry database name."""

    kusto_table_name: str = "LogExecutionClusterInfo"
    """Table the query-design prompt points the model at."""

    kusto_columns: str = DEFAULT_KUSTO_COLUMNS
    """Comma-separated column list shown to the model."""

    kusto_auth_mode: str = "interactive"
    """``interactive`` (browser prompt) or ``default`` (DefaultAzureCredential)."""

    # -- Thresholds / Tuning -----------------------------------------------

    query_row_limit: int = Field(default=100, gt=0)
    """Maximum number of data rows rendered per query result."""

    default_max_cluster_usage: int = Field(default=85, ge=0, le=100)
    """Target cluster usage percentage when the operator gives none."""

    # -- Operational -------------------------------------------------------

    log_level: str = "INFO"
    """Root log level for the command-line entry point."""


def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Uses ``lru_cache`` semantics via a module-level singleton so the
    ``.env`` file is read at most once per process.

    Returns:
        The global ``Settings`` object.
    """
    return _settings


_settings = Settings()
