import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


DEFAULT_LOCATION_URI_BASE = "http://data.lblod.info/id/werkingsgebieden/"
# Marks Location nodes created by this service so they can be told apart
# from imported locations.
DEFAULT_CREATOR_URI = "http://lblod.data.gift/services/scope-of-operation-service"

DEFAULT_ENV_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".env"))


@dataclass(frozen=True)
class Settings:
    neo4j_uri: str
    neo4j_user: str
    neo4j_password: Optional[str]
    neo4j_database: Optional[str]
    location_uri_base: str
    creator_uri: str
    log_level: str


def _load_env_from_file(env_path: str = DEFAULT_ENV_PATH):
    """Load environment variables from a .env file at the project root if present.

    Only sets variables that aren't already present in the process
    environment; a variable set to an empty string counts as present.
    """
    if not os.path.isfile(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as f:
        for line in f:
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            if "=" not in s:
                continue
            key, val = s.split("=", 1)
            # Allow space around '=' like KEY = value
            key = key.strip()
            val = val.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = val


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read the service settings from the environment (and .env) once."""
    _load_env_from_file()
    return Settings(
        neo4j_uri=os.getenv("NEO4J_URI") or "bolt://localhost:7687",
        neo4j_user=os.getenv("NEO4J_USER") or "neo4j",
        neo4j_password=os.getenv("NEO4J_PASSWORD"),
        neo4j_database=os.getenv("NEO4J_DATABASE") or None,
        location_uri_base=os.getenv("LOCATION_URI_BASE") or DEFAULT_LOCATION_URI_BASE,
        creator_uri=os.getenv("SCOPE_CREATOR_URI") or DEFAULT_CREATOR_URI,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
