"""Health check endpoints for sketch-canvas.

Provides /health and /ready endpoints for liveness and readiness checks.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar

import structlog
from litestar import Controller, get

from sketch_canvas.services.sessions import SessionService  # noqa: TC001

logger = structlog.get_logger(__name__)

# Registry checks slower than this report the component as degraded.
SLOW_REGISTRY_MS = 1000.0


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status of an individual component."""

    name: str
    status: HealthStatus
    message: str | None = None
    latency_ms: float | None = None


@dataclass
class HealthResponse:
    """Health check response."""

    status: HealthStatus
    version: str = "0.1.0"
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    components: list[ComponentHealth] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "version": self.version,
            "timestamp": self.timestamp,
            "components": [
                {"name": c.name, "status": c.status.value, "message": c.message, "latency_ms": c.latency_ms}
                for c in self.components
            ],
        }


class HealthController(Controller):
    """Health check controller.

    Provides endpoints for liveness and readiness checks. The session
    registry is the only backing component; it is checked by listing the
    live sessions.
    """

    path = ""
    tags: ClassVar[list[str]] = ["Health"]

    @get("/health")
    async def health(self, service: SessionService) -> dict:
        """Liveness check endpoint.

        Returns:
            Health status with the application and session registry
            components. The overall status is the worst component status.
        """
        components = [
            ComponentHealth(name="application", status=HealthStatus.HEALTHY, message="Application is running"),
            await self._check_sessions(service),
        ]

        statuses = [c.status for c in components]
        if HealthStatus.UNHEALTHY in statuses:
            overall_status = HealthStatus.UNHEALTHY
        elif HealthStatus.DEGRADED in statuses:
            overall_status = HealthStatus.DEGRADED
        else:
            overall_status = HealthStatus.HEALTHY

        return HealthResponse(status=overall_status, components=components).to_dict()

    @get("/ready")
    async def ready(self, service: SessionService) -> dict:
        """Readiness check endpoint."""
        sessions = await self._check_sessions(service)
        checks = {"application": True, "sessions": sessions.status != HealthStatus.UNHEALTHY}
        return {
            "ready": all(checks.values()),
            "timestamp": datetime.now(UTC).isoformat(),
            "checks": checks,
        }

    async def _check_sessions(self, service: SessionService) -> ComponentHealth:
        """Check the session registry.

        Returns:
            Unhealthy if the registry raises, degraded if it answers slower
            than ``SLOW_REGISTRY_MS``, healthy otherwise.
        """
        start = time.perf_counter()
        try:
            sessions = await service.list_sessions()
        except Exception as exc:
            logger.exception("Session registry health check failed")
            return ComponentHealth(name="sessions", status=HealthStatus.UNHEALTHY, message=str(exc))

        latency_ms = round((time.perf_counter() - start) * 1000, 2)
        status = HealthStatus.DEGRADED if latency_ms > SLOW_REGISTRY_MS else HealthStatus.HEALTHY
        return ComponentHealth(
            name="sessions",
            status=status,
            message=f"{len(sessions)} active session(s)",
            latency_ms=latency_ms,
        )
