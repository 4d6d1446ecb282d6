from fastapi import APIRouter
from teamtrain.api.routes.auth import router as auth_router
from teamtrain.api.routes.trainings import router as trainings_router
from teamtrain.api.routes.exercises import router as exercises_router
from teamtrain.api.routes.invites import router as invites_router
from teamtrain.api.routes.users import router as users_router
from teamtrain.api.routes.upload import router as upload_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(trainings_router, prefix="/trainings", tags=["trainings"])
api_router.include_router(exercises_router, prefix="/exercises", tags=["exercises"])
api_router.include_router(invites_router, prefix="/invites", tags=["invites"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(upload_router, tags=["upload"])
