"""PostgreSQL async connection pool."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from erpaccess.domain.exceptions import InfrastructureFailure, ValidationError


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (e.g. via PoolLifespanMiddleware in ASGI lifespan).
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


@asynccontextmanager
async def translate_errors(operation: str) -> AsyncIterator[None]:
    """Map psycopg errors to domain exceptions.

    Malformed identifiers become ValidationError; anything else the driver
    raises (connectivity, pool timeout) becomes InfrastructureFailure.
    """
    try:
        yield
    except psycopg.DataError as e:
        raise ValidationError(f"{operation}: {e}", code="INVALID_IDENTIFIER") from e
    except psycopg.Error as e:
        raise InfrastructureFailure(f"{operation} failed") from e
