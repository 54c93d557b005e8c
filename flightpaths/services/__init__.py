"""Services layer - Application orchestration.

Available services:
- RoutePlannerService: Route queries over the current ledger snapshot
"""

from .route_planner import RoutePlannerService

__all__ = ["RoutePlannerService"]
