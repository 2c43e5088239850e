"""FastAPI application factory and HTTP controllers.

This module defines the HTTP endpoints of the blog list backend.
Controllers are intentionally thin: they accept requests, delegate to
services, and return JSON responses. Errors raised by services are
mapped to `{"error": message}` bodies by the handlers registered in
`create_app`.

Endpoints implemented:
- GET /api/blogs
- GET /api/blogs/{id}
- POST /api/blogs
- PUT /api/blogs/{id}
- DELETE /api/blogs/{id}
- GET /api/users
- POST /api/users
- POST /api/login
- POST /api/testing/reset (test environment only)
- GET /health
"""

from fastapi import FastAPI, APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlmodel import Session
from typing import List
import os
import json
import logging
import time
import uuid
from .database import make_engine, create_db_and_tables, get_session
from . import services, repositories
from .auth import TokenIdentity, get_current_identity
from .config import Settings
from .errors import AuthenticationError, BlogListError, StoreError
from .schemas import BlogIn, BlogOut, LoginIn, RegisterIn, TokenOut, UserOut

logger = logging.getLogger("bloglist.api")

blogs_router = APIRouter(prefix="/api/blogs", tags=["blogs"])
users_router = APIRouter(prefix="/api/users", tags=["users"])
login_router = APIRouter(prefix="/api/login", tags=["login"])
testing_router = APIRouter(prefix="/api/testing", tags=["testing"])


@blogs_router.get("", response_model=List[BlogOut])
def list_blogs(db: Session = Depends(get_session)):
    """List every blog with its owner expanded to id, username and name."""
    return [BlogOut.from_model(b) for b in services.BlogService(db).list_blogs()]


@blogs_router.get("/{blog_id}", response_model=BlogOut)
def get_blog(blog_id: int, db: Session = Depends(get_session)):
    return BlogOut.from_model(services.BlogService(db).get_blog(blog_id))


@blogs_router.post("", response_model=BlogOut, status_code=201)
def create_blog(
    payload: BlogIn,
    db: Session = Depends(get_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Create a blog owned by the authenticated user.

    `likes` defaults to 0 when omitted; `title` and `url` are required.
    """
    blog = services.BlogService(db).create_blog(identity, payload)
    return BlogOut.from_model(blog)


@blogs_router.put("/{blog_id}", response_model=BlogOut)
def update_blog(blog_id: int, payload: BlogIn, db: Session = Depends(get_session)):
    """Replace title, author, url and likes of a blog.

    Public on purpose: clients like a blog by sending it back with
    `likes + 1`.
    """
    blog = services.BlogService(db).update_blog(blog_id, payload)
    return BlogOut.from_model(blog)


@blogs_router.delete("/{blog_id}", status_code=204)
def delete_blog(
    blog_id: int,
    db: Session = Depends(get_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Delete a blog. Only its creator may do so."""
    services.BlogService(db).delete_blog(identity, blog_id)
    return Response(status_code=204)


@users_router.get("", response_model=List[UserOut])
def list_users(db: Session = Depends(get_session)):
    """List users together with the blogs they created."""
    return [UserOut.from_model(u) for u in services.UserService(db).list_users()]


@users_router.post("", response_model=UserOut, status_code=201)
def register(payload: RegisterIn, request: Request, db: Session = Depends(get_session)):
    """Register a new user.

    Usernames and passwords shorter than 3 characters and taken
    usernames are rejected with 400. The password hash is never
    returned.
    """
    auth = services.AuthService(db, request.app.state.settings)
    user = auth.register(payload.username, payload.name, payload.password)
    return UserOut.from_model(user)


@login_router.post("", response_model=TokenOut)
def login(payload: LoginIn, request: Request, db: Session = Depends(get_session)):
    """Exchange credentials for a signed bearer token.

    The token carries `user_id` and `username` and expires after
    `JWT_EXPIRE_SECONDS`.
    """
    auth = services.AuthService(db, request.app.state.settings)
    return auth.login(payload.username, payload.password)


@testing_router.post("/reset", status_code=204)
def reset_database(db: Session = Depends(get_session)):
    """Delete all users and blogs. Mounted only when ENV=test."""
    repositories.reset_all(db)
    return Response(status_code=204)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        msg = err.get("msg", "invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "invalid request"


def _register_error_handlers(app: FastAPI):
    @app.exception_handler(BlogListError)
    async def blog_list_error_handler(request: Request, exc: BlogListError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(status_code=int(exc.status), content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "unknown endpoint" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        err = StoreError()
        return JSONResponse(status_code=int(err.status), content=err.to_dict())


def _register_request_logging(app: FastAPI):
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = req_id
        started = time.perf_counter()
        response: Response
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
            logger.exception(
                "request_failed %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "duration_ms": elapsed_ms,
                    },
                    ensure_ascii=True,
                ),
            )
            raise
        response.headers["X-Request-ID"] = req_id
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        if request.url.path.startswith("/api"):
            logger.info(
                "request_done %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "status_code": response.status_code,
                        "duration_ms": elapsed_ms,
                    },
                    ensure_ascii=True,
                ),
            )
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit store handle and secret.

    The engine and settings live on `app.state`; handlers reach them
    through the request instead of module globals.
    """
    settings = settings or Settings()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(title="Blog List API")
    app.state.settings = settings
    app.state.engine = make_engine(settings.DATABASE_URL)
    create_db_and_tables(app.state.engine)

    # Wide-open CORS keeps the local frontend dev server working without extra config.
    if settings.ALLOW_DEV_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    _register_request_logging(app)
    _register_error_handlers(app)

    app.include_router(blogs_router)
    app.include_router(users_router)
    app.include_router(login_router)
    if settings.is_test:
        app.include_router(testing_router)

    @app.get("/health")
    def health():
        """Lightweight health check for uptime monitoring."""
        return {"status": "ok"}

    logger.info("app ready env=%s", settings.ENV)
    return app


def run():
    """Serve the app with uvicorn (console entry point)."""
    import uvicorn
    port = int(os.getenv("PORT", "3003"))
    uvicorn.run("bloglist.main:create_app", factory=True, host="0.0.0.0", port=port)
