from fastapi import APIRouter

from .hello import router as hello_router

router = APIRouter()

# additional routers
router.include_router(hello_router)
