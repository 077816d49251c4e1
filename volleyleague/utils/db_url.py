"""Database URL handling shared by the app, alembic and scripts.

Nothing here reads settings, so migrations and one-off scripts can use it
with only ``DATABASE_URL`` in the environment.
"""

import ssl
from typing import Any, Dict, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

ASYNC_DRIVER = "postgresql+asyncpg"

# libpq query parameters asyncpg refuses as connect kwargs
_LIBPQ_ONLY_PARAMS = frozenset({"sslmode", "channel_binding"})


def normalize_db_url(url: str) -> str:
    """Use asyncpg for bare ``postgres://`` / ``postgresql://`` URLs.

    An explicit driver (``postgresql+psycopg://``) is left alone.
    """
    try:
        u = make_url(url)
    except ArgumentError:
        scheme, sep, rest = url.partition("://")
        if sep and scheme in ("postgres", "postgresql"):
            return f"{ASYNC_DRIVER}://{rest}"
        return url

    if u.drivername in ("postgres", "postgresql"):
        u = u.set(drivername=ASYNC_DRIVER)
    return u.render_as_string(hide_password=False)


def ssl_connect_args(sslmode: str | None) -> Dict[str, Any]:
    """Translate a libpq ``sslmode`` into asyncpg's ``ssl`` connect kwarg."""
    if not sslmode:
        return {}

    mode = sslmode.lower()
    if mode == "disable":
        return {"ssl": False}
    if mode in ("allow", "prefer"):
        # asyncpg negotiates TLS on its own when the server asks for it
        return {}

    context = ssl.create_default_context()
    if mode == "require":
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    elif mode == "verify-ca":
        context.check_hostname = False
    return {"ssl": context}


def prepare_asyncpg_connection(url: str) -> Tuple[str, Dict[str, Any]]:
    """Return a URL asyncpg accepts plus the connect kwargs it implies."""
    split = urlsplit(normalize_db_url(url))
    params = parse_qsl(split.query, keep_blank_values=True)

    sslmode = next((v for k, v in params if k == "sslmode"), None)
    kept = [(k, v) for k, v in params if k not in _LIBPQ_ONLY_PARAMS]

    cleaned = urlunsplit(split._replace(query=urlencode(kept, doseq=True))).rstrip("?")
    return cleaned, ssl_connect_args(sslmode)


def describe_database_url(url: str) -> str:
    """Return a sanitized description of the DB URL for logging.

    Example: "postgresql+asyncpg://user@host:5432/dbname"
    Passwords are never included.
    """
    try:
        u = make_url(url)
    except ArgumentError:
        return "<unparseable database URL>"
    port = f":{u.port}" if u.port else ""
    return f"{u.drivername}://{u.username or '?'}@{u.host or '?'}{port}/{u.database or '?'}"
