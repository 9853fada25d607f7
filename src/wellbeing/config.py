import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("WELLBEING_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()

TRUTHY = {"1", "true", "yes", "on"}

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in TRUTHY


@dataclass
class Config:
    environment: str
    database_url: str
    use_in_memory_db: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get("DATABASE_URL", ""),
            use_in_memory_db=_flag("USE_IN_MEMORY_DB"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


config = Config.from_env()


def configure_logging(level: str = None) -> None:
    """Configure root logging once for the app factory and the CLI."""
    logging.basicConfig(level=level or config.log_level, format=LOG_FORMAT)
