"""Configuration management for fiado."""

from dataclasses import dataclass, field

from fiado.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")
DEFAULT_REMINDER_MESSAGE = "Sin pagos en el último mes"
DEFAULT_INCREASE_NOTE = "Aumento del {percentage}% aplicado"


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "postgres"
    user: str = "postgres"
    password: str = "postgres"
    url: str | None = None

    @property
    def connection_string(self) -> str:
        """Get connection string, preferring an explicit URL."""
        if self.url:
            return self.url
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class LedgerConfig:
    """Main configuration for fiado."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    reminder_message: str = DEFAULT_REMINDER_MESSAGE
    increase_note_template: str = DEFAULT_INCREASE_NOTE
    currency_symbol: str = "$"
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.log_format!r}, expected one of {LOG_FORMATS}"
            )

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        try:
            port = int(os.getenv("POSTGRES_PORT", "5432"))
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=port,
            database=os.getenv("POSTGRES_DB", "postgres"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            url=os.getenv("DATABASE_URL") or None,
        )

        return cls(
            postgres=postgres,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard").lower(),
            reminder_message=os.getenv("REMINDER_MESSAGE", DEFAULT_REMINDER_MESSAGE),
            increase_note_template=os.getenv("INCREASE_NOTE_TEMPLATE", DEFAULT_INCREASE_NOTE),
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "$"),
            seed=seed,
        )
