import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    store_backend: str = "sql"
    database_url: str | None = None
    store_url: str | None = None
    store_key: str | None = None
    store_timeout: float = 10.0
    max_list_limit: int = 100
    require_password_on_delete: bool = True
    seed_demo_teams: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            store_backend=os.getenv("STORE_BACKEND", "sql").strip().lower(),
            database_url=os.getenv("DATABASE_URL"),
            store_url=os.getenv("STORE_URL"),
            store_key=os.getenv("STORE_KEY"),
            store_timeout=float(os.getenv("STORE_TIMEOUT", "10.0")),
            max_list_limit=int(os.getenv("MAX_LIST_LIMIT", "100")),
            require_password_on_delete=_env_bool("REQUIRE_PASSWORD_ON_DELETE", "true"),
            seed_demo_teams=_env_bool("SEED_DEMO_TEAMS", "false"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[
                o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
            ],
        )

    def validate(self) -> None:
        if self.store_backend == "sql":
            if not self.database_url:
                raise RuntimeError("DATABASE_URL is not set. Put it into backend/.env")
        elif self.store_backend == "rest":
            if not self.store_url or not self.store_key:
                raise RuntimeError(
                    "STORE_URL and STORE_KEY must be set for STORE_BACKEND=rest"
                )
        else:
            raise RuntimeError(f"Unknown STORE_BACKEND: {self.store_backend!r}")
