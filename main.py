import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import close_db, init_db
from exceptions import LoanLinkError
from logging_config import RequestIDMiddleware, get_request_id, setup_logging
from api.applications import router as applications_router
from api.loans import router as loans_router
from api.payments import router as payments_router
from api.users import router as users_router
from services.checkout import init_checkout_client
from services.identity import init_firebase

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    init_checkout_client()
    init_firebase()
    logger.info("Server ready", extra={"port": settings.port})
    yield
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Loan marketplace API: listings, users, applications and fee checkout",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(LoanLinkError)
async def loanlink_error_handler(request: Request, exc: LoanLinkError):
    content = {"error": exc.message, **getattr(exc, "counters", {})}
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = [
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"error": "; ".join(problems) or "Invalid request"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"request_id": get_request_id(request), "path": request.url.path})
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(loans_router)
app.include_router(users_router)
app.include_router(applications_router)
app.include_router(payments_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "LoanLink server is running"


@app.get("/health")
async def health():
    return {"status": "ok"}
