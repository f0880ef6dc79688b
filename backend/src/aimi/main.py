import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.logging import setup_logging
from .api.v1.router import api_router
from .core.settings import get_settings, settings_diagnostics


def create_app() -> FastAPI:
    setup_logging()
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version="0.1.0")
    # CORS（最小允许，本地开发）
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)

    @app.get("/health")
    def _health():
        return {"status": "ok"}

    # 启动日志诊断（简要，不含密钥）
    logging.getLogger(__name__).info(f"settings: {settings_diagnostics()}")
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("aimi.main:create_app", factory=True, host="0.0.0.0", port=8000,
                reload=get_settings().is_dev)
