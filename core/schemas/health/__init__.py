"""Health check schemas."""

from core.schemas.health.dependency_health import DependencyHealth
from core.schemas.health.liveness_response import LivenessResponse
from core.schemas.health.readiness_response import ReadinessResponse

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
