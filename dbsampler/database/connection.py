"""Build SQLAlchemy engines from connection configuration."""

import logging
from typing import Any, Dict, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import ArgumentError

from dbsampler.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Parameter mapping: accepted alias -> sqlalchemy URL field
_PARAM_ALIASES = {
    "dbname": "database",
    "user": "username",
    "driver": "drivername",
    "type": "drivername",
}


def translate_connection_parameters(config: Dict[str, Any]) -> Dict[str, Any]:
    """Translate connection parameter aliases to SQLAlchemy URL field names.

    Both naming conventions are accepted:
    - SQLAlchemy: drivername, username, database
    - psycopg2/CLI style: driver/type, user, dbname

    Args:
        config: Original connection parameters

    Returns:
        Translated parameters with SQLAlchemy URL field names
    """
    translated = dict(config)

    for alias, field_name in _PARAM_ALIASES.items():
        if alias in config and field_name not in config:
            translated[field_name] = translated.pop(alias)
            logger.debug(f"Translated connection parameter '{alias}' -> '{field_name}'")

    return translated


def build_connection_url(config: Union[str, Dict[str, Any]]) -> Union[str, URL]:
    """Return a SQLAlchemy URL for a URL string or a connection mapping."""
    if isinstance(config, str):
        if not config.strip():
            raise ConfigurationError("Connection URL must not be empty")
        return config

    if not isinstance(config, dict):
        raise ConfigurationError(
            "Connection must be a URL string or a mapping of connection parameters"
        )

    if config.get("url"):
        return config["url"]

    params = translate_connection_parameters(config)
    if not params.get("drivername"):
        raise ConfigurationError(
            "Connection is missing 'url' or 'drivername' (e.g. 'mysql+pymysql')"
        )

    port = params.get("port")
    return URL.create(
        drivername=params["drivername"],
        username=params.get("username"),
        password=params.get("password"),
        host=params.get("host"),
        port=int(port) if port not in (None, "") else None,
        database=params.get("database"),
        query=params.get("query") or {},
    )


def create_database_engine(config: Union[str, Dict[str, Any]]) -> Engine:
    """Create an engine for the given connection configuration.

    Args:
        config: URL string, or mapping with either 'url' or URL parts
            (drivername, host, port, database, username, password, query)

    Returns:
        SQLAlchemy Engine

    Raises:
        ConfigurationError: If the configuration cannot describe a connection
    """
    url = build_connection_url(config)
    engine_options = {}
    if isinstance(config, dict):
        engine_options = dict(config.get("engine_options") or {})

    try:
        engine = create_engine(url, **engine_options)
    except ArgumentError as e:
        raise ConfigurationError(f"Invalid database connection: {e}") from e
    logger.debug(f"Created engine for dialect '{engine.dialect.name}'")
    return engine
