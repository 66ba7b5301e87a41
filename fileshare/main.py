# Filename: fileshare/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import auth as auth_router, directories as directories_router, files as files_router
from .routers import root as root_router, shared as shared_router
from .config import settings
from .db import engine, init_db
from .gateway import SqlGateway
from .logging_config import AccessLogMiddleware, setup_logging
from .repository import Repository
from .storage import LocalStorage

app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)

origins = ["*"] if settings.cors_allow_origins == "*" else [o.strip() for o in settings.cors_allow_origins.split(",")]
allow_methods = ["*"] if settings.cors_allow_methods == "*" else [m.strip() for m in settings.cors_allow_methods.split(",")]
allow_headers = ["*"] if settings.cors_allow_headers == "*" else [h.strip() for h in settings.cors_allow_headers.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=allow_methods,
    allow_headers=allow_headers,
    expose_headers=["Content-Length"],
    max_age=12 * 60 * 60,
)
app.add_middleware(AccessLogMiddleware)

app.include_router(auth_router.router)
app.include_router(directories_router.router)
app.include_router(files_router.router)
app.include_router(shared_router.router)
app.include_router(root_router.router)


@app.on_event("startup")
def on_startup():
    setup_logging()
    init_db()
    repository = Repository(SqlGateway(engine), LocalStorage(settings.filestore_path))
    repository.load()
    app.state.repository = repository
