# backend/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from database import init_db, dispose_db
from utils.errors import AppError
from utils.messages import t

# Process-level variables (PORT) come from .env as well
load_dotenv()

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# Routers
from routes.users import router as users_router
from routes.products import router as products_router
from routes.categories import router as categories_router
from routes.cart import router as cart_router
from routes.transactions import router as transactions_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema on startup, connection pool released on shutdown
    init_db()
    yield
    dispose_db()


app = FastAPI(title="Shop API", version="1.0.0", lifespan=lifespan)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Every error body carries a human-readable "message"
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)

    if first.get("type") == "json_invalid" or not field:
        message = t("validation.invalid_body")
    elif first.get("type") == "missing":
        message = t("validation.missing_field", field=field)
    else:
        message = t("validation.invalid_field", field=field)
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Unhandled store error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": t("error.server")})


# Router registration
app.include_router(users_router)
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(cart_router)
app.include_router(transactions_router)

@app.get("/")
def read_root():
    return {"message": t("app.running")}


if __name__ == "__main__":
    import uvicorn, os
    port = int(os.environ.get("PORT", 3000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=False)
