"""API routes for the FastAPI application."""

from familytree.api.router import TrailingSlashRouter
from familytree.api.v1.endpoints import (
    achievements,
    auth,
    change_logs,
    family_members,
    family_trees,
    guest_invites,
    health,
    life_events,
    members,
    passing_records,
    users,
)

api_router = TrailingSlashRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(family_trees.router, prefix="/family-trees", tags=["family-trees"])
api_router.include_router(members.router, prefix="/family-trees", tags=["members"])
api_router.include_router(family_members.router, prefix="/family-members", tags=["members"])
api_router.include_router(life_events.router, prefix="/family-trees", tags=["life-events"])
api_router.include_router(
    passing_records.router, prefix="/family-trees", tags=["passing-records"]
)
api_router.include_router(achievements.router, prefix="/family-trees", tags=["achievements"])
api_router.include_router(guest_invites.router, prefix="/family-trees", tags=["guest-invites"])
api_router.include_router(change_logs.router, prefix="/family-trees", tags=["change-logs"])
