"""Health check service with cached dependency checks."""

import logging
import time

from django.db import connection
from django.db.utils import OperationalError

from core.broker import get_broker
from core.enums import HealthStatus
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._db_health_cache: DependencyHealth | None = None
        self._db_health_cache_time: float = 0.0
        self._broker_health_cache: DependencyHealth | None = None
        self._broker_health_cache_time: float = 0.0

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive).

        Returns:
            LivenessResponse with status "alive"
        """
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with database and broker health checks.

        Returns degraded (ready=True, degraded=True) when a dependency is
        down so the API keeps accepting reads while it recovers.

        Returns:
            ReadinessResponse with overall status and dependency health
        """
        db_health = self.check_database_health()
        broker_health = self.check_broker_health()
        all_healthy = db_health.healthy and broker_health.healthy

        return ReadinessResponse(
            ready=True,
            status="ready" if all_healthy else "degraded",
            degraded=not all_healthy,
            dependencies={"database": db_health, "broker": broker_health},
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity with caching.

        Uses Django's ensure_connection() so no query is executed.

        Returns:
            DependencyHealth with database status
        """
        current_time = time.time()
        if (
            self._db_health_cache is not None
            and (current_time - self._db_health_cache_time) < self.cache_ttl_seconds
        ):
            return self._db_health_cache

        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            new_health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except OperationalError as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.warning("Database health check failed: %s", e)
        except Exception as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking database: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.error("Unexpected error checking database: %s", e)

        self._db_health_cache = new_health
        self._db_health_cache_time = current_time
        return new_health

    def check_broker_health(self) -> DependencyHealth:
        """Check broker connectivity with caching.

        Returns:
            DependencyHealth with broker status
        """
        current_time = time.time()
        if (
            self._broker_health_cache is not None
            and (current_time - self._broker_health_cache_time) < self.cache_ttl_seconds
        ):
            return self._broker_health_cache

        start_time = time.perf_counter()
        try:
            reachable = get_broker().ping()
            new_health = DependencyHealth(
                healthy=reachable,
                status=HealthStatus.HEALTHY if reachable else HealthStatus.UNHEALTHY,
                message=(
                    "Broker connection successful"
                    if reachable
                    else "Broker health check failed: no reply"
                ),
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except Exception as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Broker connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
            logger.warning("Broker health check failed: %s", e)

        self._broker_health_cache = new_health
        self._broker_health_cache_time = current_time
        return new_health


# Global health service instance
health_service = HealthService()
