from fastapi import APIRouter

from user_api.api.routes_posts import router as posts_router
from user_api.api.routes_users import router as users_router


api_router = APIRouter()

api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(posts_router, prefix="/posts", tags=["posts"])
