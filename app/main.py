from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.api.shops import router as shops_router
from app.api.events import router as events_router
from app.core.exceptions.exceptions import AppError, DomainError, NotFoundError
from app.services.database import init_db
from app.services.memory_cache import MemoryCache, get_cache
from app.utils.log import app_logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    init_db()
    yield
    # Shutdown logic
    get_cache().clear()

app = FastAPI(title="Manacity API", lifespan=lifespan)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, DomainError):
        status_code = 400
    else:
        status_code = 500
        app_logger.error("api.error", path=request.url.path, error=str(exc), exc_info=exc)
    message = getattr(exc, "message", None) or str(exc)
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": {"code": exc.code, "message": message}},
    )


@app.get("/health", tags=["Health"])
def health(cache: MemoryCache = Depends(get_cache)) -> dict:
    return {"ok": True, "cacheEntries": len(cache)}


# include routes
app.include_router(shops_router)
app.include_router(events_router)
