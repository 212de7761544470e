"""Page routes: the public login page and the protected chat page"""

from fastapi import APIRouter, Depends

from .assets import StaticAssets
from .services import ChatServices, get_services

router = APIRouter(tags=["pages"])


def _assets(services: ChatServices = Depends(get_services)) -> StaticAssets:
    return services.assets


@router.get("/auth")
async def auth_page(assets: StaticAssets = Depends(_assets)):
    return assets.response("auth.html")


@router.get("/auth.js")
async def auth_script(assets: StaticAssets = Depends(_assets)):
    return assets.response("auth.js")


@router.get("/")
async def index_page(assets: StaticAssets = Depends(_assets)):
    return assets.response("index.html")


@router.get("/style.css")
async def style_sheet(assets: StaticAssets = Depends(_assets)):
    return assets.response("style.css")


@router.get("/script.js")
async def chat_script(assets: StaticAssets = Depends(_assets)):
    return assets.response("script.js")
