# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.routers import courses, health

import time
import logging
from fastapi import Request
from app.config import settings
from app.logging_config import setup_logging
from app.schemas.course import ErrorOut
from app.utils.notion_client import NotionAPIError


setup_logging()
logger = logging.getLogger("app")


app = FastAPI(title="Notion Course Schedule Proxy", version="1.0.0")

# CORS 設定：預設允許所有來源，正式環境以 CORS_ORIGINS 收斂
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


@app.exception_handler(NotionAPIError)
async def notion_error_handler(request: Request, exc: NotionAPIError):
    logger.error("Notion proxy error (%s): %s", exc.status_code, exc.detail)
    body = ErrorOut(error=f"代理请求失败({exc.status_code})", detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Routers
app.include_router(health.router)
app.include_router(courses.router)


def run():
    import uvicorn

    logger.info("Notion proxy listening on http://localhost:%d", settings.PORT)
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
