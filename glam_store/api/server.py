from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from glam_store import __version__, catalog
from glam_store.auth import (
    Session,
    SessionStore,
    authenticate,
    bootstrap_admin_if_needed,
    register_user,
    require_auth,
)
from glam_store.auth.deps import clear_session_cookie, session_token, set_session_cookie
from glam_store.config import Config, load_config
from glam_store.errors import StoreError, ValidationError
from glam_store.notify import SmsError, send_sms
from glam_store.store import ProductStore, UserStore, build_stores
from glam_store.util.time import utcnow_iso


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


# Any local dev origin, whatever the port.
LOCAL_ORIGIN_REGEX = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"


# -----------------------------
# Request bodies
# -----------------------------
# Every field is Optional so a missing field is our 400 "Missing fields",
# not the framework's 422.


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProductRequest(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    description: Optional[str] = None
    image_url: Optional[str] = None
    video_id: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0, le=catalog.MAX_STOCK)
    is_active: Optional[bool] = None


class SmsRequest(BaseModel):
    to: Optional[str] = None
    body: Optional[str] = None


def create_app(
    cfg: Config,
    *,
    user_store: UserStore | None = None,
    product_store: ProductStore | None = None,
) -> FastAPI:
    """Build the API around a config and (optionally) pre-built stores."""

    if user_store is None or product_store is None:
        built_users, built_products = build_stores(cfg)
        user_store = user_store or built_users
        product_store = product_store or built_products

    users: UserStore = user_store
    products: ProductStore = product_store
    sessions = SessionStore(ttl_seconds=int(cfg.SESSION_TTL_HOURS) * 3600)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Ensure schema / indexes exist.
        users.init_schema()
        products.init_schema()

        # Bootstrap first admin if configured (only when there are no users yet)
        boot = bootstrap_admin_if_needed(cfg, users)
        if boot:
            _debug(f"Bootstrapped initial admin user: email={boot.get('email')}")
        yield

    app = FastAPI(title="Glam Store API", version=__version__, lifespan=lifespan)

    # Auth deps read these.
    app.state.cfg = cfg
    app.state.sessions = sessions
    app.state.users = users
    app.state.products = products

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_origin_regex=LOCAL_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        s = sessions.get(request.cookies.get(cfg.SESSION_COOKIE_NAME), touch=False)
        _debug(f"{utcnow_iso()} {request.method} {request.url.path} session={s.user_id if s else 'guest'}")
        return await call_next(request)

    # -----------------------------
    # Errors -> {"message": ...}
    # -----------------------------

    @app.exception_handler(StoreError)
    async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
        if exc.status_code >= 500:
            _debug(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": "Invalid request body"})

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        _debug(f"{request.method} {request.url.path} unhandled error: {exc!r}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    # -----------------------------
    # Health
    # -----------------------------

    @app.get("/")
    def root() -> Dict[str, Any]:
        return {"status": "ok", "service": "glam-store"}

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "ok"}

    # -----------------------------
    # SMS
    # -----------------------------

    @app.post("/enviar-sms")
    def enviar_sms(payload: SmsRequest) -> Dict[str, Any]:
        to = (payload.to or "").strip()
        body = payload.body or ""
        if not to or not body:
            raise ValidationError("Missing phone number or message.")
        try:
            result = send_sms(cfg, to=to, body=body)
        except SmsError as e:
            _debug(f"SMS provider error: {e}")
            raise StoreError("Error communicating with the SMS provider.") from e
        if result.simulated:
            return {"message": "(TEST_MODE) SMS simulated successfully."}
        return {"message": "SMS sent successfully."}

    # -----------------------------
    # Auth
    # -----------------------------

    @app.post("/api/register")
    def api_register(payload: RegisterRequest) -> Dict[str, Any]:
        u = register_user(users, name=payload.name, email=payload.email, password=payload.password)
        return {**u, "message": "Registration successful. Please log in."}

    @app.post("/api/login")
    def api_login(payload: LoginRequest, request: Request, response: Response) -> Dict[str, Any]:
        user = authenticate(users, email=payload.email, password=payload.password)

        # Drop whatever session this browser held before.
        sessions.destroy(session_token(request))
        sessions.purge_expired()

        s = sessions.create(user_id=user.user_id, name=user.name, is_admin=user.is_admin)
        set_session_cookie(response, token=s.token, cfg=cfg)
        _debug(f"login ok user_id={user.user_id} is_admin={user.is_admin}")

        return {"id": user.user_id, "name": user.name, "email": user.email, "is_admin": user.is_admin}

    @app.post("/api/logout")
    def api_logout(request: Request, response: Response) -> Dict[str, Any]:
        sessions.destroy(session_token(request))
        clear_session_cookie(response, cfg)
        return {"ok": True}

    @app.get("/api/me")
    def api_me(session: Session = Depends(require_auth)) -> Dict[str, Any]:
        return session.identity()

    @app.get("/api/users")
    def api_users() -> List[Dict[str, Any]]:
        return [u.public() for u in users.list_users()]

    # -----------------------------
    # Products
    # -----------------------------
    # Mutations require a session, not the admin role.

    @app.get("/api/products")
    def api_list_products(show_all: Optional[str] = Query(default=None, alias="all")) -> List[Dict[str, Any]]:
        rows = catalog.list_products(products, include_inactive=(show_all == "1"))
        return [p.to_dict() for p in rows]

    @app.get("/api/products/{product_id}")
    def api_get_product(product_id: str) -> Dict[str, Any]:
        return catalog.get_product(products, product_id).to_dict()

    @app.post("/api/products", status_code=201)
    def api_create_product(
        payload: ProductRequest,
        _session: Session = Depends(require_auth),
    ) -> Dict[str, Any]:
        product_id = catalog.create_product(products, payload.model_dump())
        return {"id": product_id, "message": "Product created."}

    @app.put("/api/products/{product_id}")
    def api_update_product(
        product_id: str,
        payload: ProductRequest,
        _session: Session = Depends(require_auth),
    ) -> Dict[str, Any]:
        catalog.update_product(products, product_id, payload.model_dump())
        return {"message": "Product updated."}

    @app.delete("/api/products/{product_id}")
    def api_delete_product(
        product_id: str,
        _session: Session = Depends(require_auth),
    ) -> Dict[str, Any]:
        catalog.delete_product(products, product_id)
        return {"message": "Product deleted."}

    return app


app = create_app(load_config())
