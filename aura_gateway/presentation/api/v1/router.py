from fastapi import APIRouter

from .aura import aura_router

# Routes carry their full /v1 path so route.path is the complete template
router = APIRouter()

router.include_router(aura_router, tags=["Aura"])
