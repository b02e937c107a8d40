"""ホスト連携用HTTPサーバー（FastAPI）"""
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .features.locations.domain.models import LocationQuery, RefreshParams, SearchParams
from .features.locations.services.location_provider import FoursquareLocationProvider
from .features.places.domain.models import Location
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    StorageError,
)
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(level=settings.log_level)
logger = get_logger(__name__)

app = FastAPI(
    title="Foursquare Location Plugin",
    description="Foursquare Places APIをランチャーの場所検索に提供するプラグイン",
    version="1.0.0",
)


class RefreshRequest(BaseModel):
    """リフレッシュ要求"""

    location: dict[str, Any]
    last_updated: int
    lang: Optional[str] = None


@lru_cache
def get_provider() -> FoursquareLocationProvider:
    """プロバイダを取得（プロセス内で1つ）"""
    return FoursquareLocationProvider.from_settings(settings)


@app.get("/health")
def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.get("/state")
def plugin_state(
    provider: FoursquareLocationProvider = Depends(get_provider),
) -> dict[str, Any]:
    """プラグインの状態（ready / setup_required）"""
    state = provider.get_plugin_state()
    return {
        **state.to_dict(),
        "storage_strategy": provider.config.storage_strategy.value,
    }


@app.get("/search")
def search(
    query: str,
    lat: float,
    lon: float,
    radius: float = 5000,
    lang: Optional[str] = None,
    allow_network: bool = True,
    provider: FoursquareLocationProvider = Depends(get_provider),
) -> list[dict[str, Any]]:
    """テキストで場所を検索"""
    locations = provider.search(
        LocationQuery(
            query=query,
            user_latitude=lat,
            user_longitude=lon,
            search_radius=radius,
        ),
        SearchParams(allow_network=allow_network, lang=lang),
    )
    return [location.to_dict() for location in locations]


@app.get("/locations/{place_id}")
def get_location(
    place_id: str,
    lang: Optional[str] = Query(default=None),
    provider: FoursquareLocationProvider = Depends(get_provider),
) -> dict[str, Any]:
    """IDで場所を取得"""
    location = provider.get(place_id, lang=lang)
    if location is None:
        raise HTTPException(status_code=404, detail=f"Location {place_id} not found")
    return location.to_dict()


@app.post("/refresh")
def refresh(
    request: RefreshRequest,
    provider: FoursquareLocationProvider = Depends(get_provider),
) -> dict[str, Any]:
    """保存済みの場所を更新"""
    try:
        item = Location.from_dict(request.location)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid location: {e}")

    location = provider.refresh(
        item,
        RefreshParams(last_updated=request.last_updated, lang=request.lang),
    )
    if location is None:
        raise HTTPException(status_code=404, detail=f"Location {item.id} no longer exists")
    return location.to_dict()


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """APIキーが拒否された"""
    logger.warning(f"Authentication failed: {exc}")
    return JSONResponse(
        status_code=401,
        content={"message": "Foursquare rejected the API key", "detail": str(exc)},
    )


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
    """Places APIの失敗"""
    logger.error(f"Backend error: {exc}")
    return JSONResponse(
        status_code=502,
        content={"message": "Foursquare API error", "detail": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """セットアップが必要"""
    logger.warning(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=503,
        content={"message": "Setup required", "detail": str(exc)},
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """APIキーの保存先を読み書きできない"""
    logger.error(f"Storage error: {exc}")
    return JSONResponse(
        status_code=503,
        content={"message": "API key storage unavailable", "detail": str(exc)},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
