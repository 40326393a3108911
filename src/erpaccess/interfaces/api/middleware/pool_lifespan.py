"""Database pool lifecycle bound to the ASGI lifespan."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool, PoolTimeout

from erpaccess.domain.exceptions import InfrastructureFailure

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the pool at startup and waits for min_size connections.

    A database that is unreachable at startup fails the ASGI startup instead
    of surfacing as 500s on the first requests.
    """

    def __init__(self, pool: AsyncConnectionPool, open_timeout: float = 10.0) -> None:
        self._pool = pool
        self._open_timeout = open_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        try:
            await self._pool.open(wait=True, timeout=self._open_timeout)
        except PoolTimeout as e:
            logger.error("database_pool_unavailable", extra={"timeout": self._open_timeout})
            raise InfrastructureFailure("database pool could not be opened") from e
        logger.info("database_pool_opened", extra={"max_size": self._pool.max_size})

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("database_pool_closed")
