import logging
import threading
from typing import Optional

from neo4j import GraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from scope_service.config import get_settings
from scope_service.errors import StoreError

logger = logging.getLogger(__name__)

_driver = None
_database: Optional[str] = None
_driver_lock = threading.Lock()


def get_driver():
    """Return the shared Neo4j driver, creating it on first use."""
    global _driver, _database
    if _driver is not None:
        return _driver
    with _driver_lock:
        if _driver is None:
            settings = get_settings()
            if not settings.neo4j_password:
                raise RuntimeError(
                    "One or more Neo4j settings are missing: NEO4J_PASSWORD\n"
                    "Define them in your environment or in a .env file at the project root."
                )
            try:
                _driver = GraphDatabase.driver(
                    settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
                )
            except (Neo4jError, DriverError, ValueError) as exc:
                raise StoreError(
                    f"Failed to create Neo4j driver for URI '{settings.neo4j_uri}'", operation="connect"
                ) from exc
            _database = settings.neo4j_database
    return _driver


def close_driver():
    global _driver
    with _driver_lock:
        if _driver is not None:
            _driver.close()
            _driver = None


def run_cypher(query: str, parameters: dict = None, operation: str = "query"):
    """Run a Cypher statement and return list of records as dicts.

    Driver and server failures are re-raised as StoreError tagged with
    `operation`, so callers can report what was being attempted without
    leaking store internals.
    """
    driver = get_driver()
    try:
        with driver.session(database=_database) as session:
            result = session.run(query, parameters or {})
            return [record.data() for record in result]
    except (Neo4jError, DriverError) as exc:
        logger.error("Graph store %s failed with parameters %r: %s", operation, parameters, exc)
        raise StoreError(f"Graph store operation '{operation}' failed", operation=operation) from exc
