from fastapi import APIRouter
from app.api.v1.endpoints import admin_events, auth, events, posts, registrations, uploads, users, webpush

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    admin_events.router,
    prefix="/admin/events",
    tags=["admin"]
)

# Wall routes live under both /events/{id}/posts and /posts/{id}
api_router.include_router(
    posts.router,
    tags=["posts"]
)

api_router.include_router(
    registrations.router,
    prefix="/registrations",
    tags=["registrations"]
)

api_router.include_router(
    uploads.router,
    prefix="/uploads",
    tags=["uploads"]
)

api_router.include_router(
    webpush.router,
    prefix="/webpush",
    tags=["webpush"]
)
