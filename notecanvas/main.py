from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from notecanvas.core.config import settings
from notecanvas.core.database import engine, Base
from notecanvas.models import user, page, block, folder  # noqa: F401 (enregistre les tables)
from notecanvas.routers import health, auth, pages, blocks, folders

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="NoteCanvas API",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(pages.router)
app.include_router(blocks.router)
app.include_router(folders.router)
