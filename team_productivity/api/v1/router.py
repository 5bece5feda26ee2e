from fastapi import APIRouter

from team_productivity.api.v1.endpoints import reports, sprints

api_router = APIRouter()

api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(sprints.router, prefix="/sprints", tags=["sprints"])


@api_router.get("/health", tags=["health"])
async def health_check():
    return {"status": "healthy"}
