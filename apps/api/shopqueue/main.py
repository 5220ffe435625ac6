import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shopqueue.core.config import settings
from shopqueue.core.errors import STATUS_INTERNAL_ERROR, store_message
from shopqueue.core.logging_config import configure_logging
from shopqueue.routers.admin import router as admin_router
from shopqueue.routers.availability import router as availability_router
from shopqueue.routers.bookings import router as bookings_router
from shopqueue.routers.employee import router as employee_router
from shopqueue.routers.queue import router as queue_router
from shopqueue.routers.shops import router as shops_router
from shopqueue.routers.tv import router as tv_router

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Shop Queue API")

# Comma-separated list, e.g.:
# CORS_ORIGINS="http://localhost:3000,https://queue.example.com"
allow_origins = settings.cors_origin_list

# Safe fallback for local dev if env var not set
if not allow_origins:
  allow_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
  ]

app.add_middleware(
  CORSMiddleware,
  allow_origins=allow_origins,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)


def _field_name(loc) -> str:
  # ("query", "shopId") -> "shopId"; ("body",) -> "body"
  parts = [str(p) for p in loc if p not in ("query", "body", "path")]
  return ".".join(parts) or "body"


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
  return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
  # Missing/malformed input is a 400 and never reaches the store
  fields = sorted({_field_name(e.get("loc", ())) for e in exc.errors()})
  return JSONResponse(
    status_code=400,
    content={"detail": f"Missing or invalid: {', '.join(fields)}", "errors": jsonable_errors(exc)},
  )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
  logger.exception("Data store error on %s %s", request.method, request.url.path)
  return JSONResponse(status_code=STATUS_INTERNAL_ERROR, content={"detail": store_message(exc)})


app.include_router(shops_router, prefix="/api", tags=["shop"])
app.include_router(availability_router, prefix="/api", tags=["availability"])
app.include_router(bookings_router, prefix="/api", tags=["bookings"])
app.include_router(queue_router, prefix="/api", tags=["queue"])
app.include_router(tv_router, prefix="/api", tags=["tv"])
app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
app.include_router(employee_router, prefix="/api/employee", tags=["employee"])

@app.get("/health")
def health():
  return {"status": "ok"}
