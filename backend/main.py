# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import SessionLocal, init_db

# Router imports
from routes.auth import router as auth_router
from routes.users import router as users_router
from routes.items import router as items_router
from routes.locations import router as locations_router
from routes.stock import router as stock_router
from routes.reports import router as reports_router
from routes.notes import router as notes_router
from routes.logs import router as logs_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialisation
init_db()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEFAULT_DATA:
        from populate_db import seed_default_data

        db = SessionLocal()
        try:
            created = seed_default_data(db)
            logger.info("Startup seed: %s", created)
        finally:
            db.close()
    yield


app = FastAPI(title="Inventario Bodega API", version="1.0.0", lifespan=lifespan)

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router registration
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(items_router)
app.include_router(locations_router)
app.include_router(stock_router, prefix="/stock")
app.include_router(reports_router)
app.include_router(notes_router)
app.include_router(logs_router)

@app.get("/")
def read_root():
    return {"message": "Inventario Bodega API funcionando"}
