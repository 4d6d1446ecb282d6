from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from teamtrain.core.rbac import get_current_user, require_admin
from teamtrain.models.user import User

WEB_DIR = Path(__file__).resolve().parent.parent / "web"

router = APIRouter(include_in_schema=False)


def page(name: str) -> FileResponse:
    return FileResponse(WEB_DIR / name, media_type="text/html")


@router.get("/")
async def calendar_page(current_user: User = Depends(get_current_user)):
    return page("index.html")


@router.get("/admin")
async def admin_page(current_user: User = Depends(require_admin)):
    return page("admin.html")


@router.get("/login")
async def login_page():
    return page("login.html")


@router.get("/register")
async def register_page():
    return page("register.html")
