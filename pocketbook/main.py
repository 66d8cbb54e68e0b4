import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .controllers import auth, entries, health, months, templates, wealth
from .database import engine, Base
from .errors import register_error_handlers

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(title="Pocketbook API")

# Explicit origins required when allow_credentials=True
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Create database tables
Base.metadata.create_all(bind=engine)

# Include routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(templates.router, prefix="/api", tags=["configuration"])
app.include_router(wealth.router, prefix="/api", tags=["wealth"])
app.include_router(months.router, prefix="/api/months", tags=["months"])
app.include_router(entries.router, prefix="/api/months", tags=["months"])
