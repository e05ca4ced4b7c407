from fastapi import APIRouter

from filestore.api.files import router as files_router

router = APIRouter()
router.include_router(files_router)
