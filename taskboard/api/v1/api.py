from fastapi import APIRouter
from .endpoints import tags, tasks

router = APIRouter()

# Include all API endpoints
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
