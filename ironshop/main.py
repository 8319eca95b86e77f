# ironshop/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ironshop.middleware import RequestIdMiddleware
from ironshop.db import Base, engine
from ironshop.config import settings
from ironshop.util.log import configure_logging
import ironshop.models  # noqa: F401  (registers tables)

from ironshop.routers import orders, admin, customers, societies, reports, catalog

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Ironshop API", version="0.1.0")

@app.on_event("startup")
def init_db():
    Base.metadata.create_all(bind=engine)

# Middlewares
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(orders.router)
app.include_router(customers.router)
app.include_router(societies.router)
app.include_router(catalog.router)
app.include_router(admin.router)
app.include_router(reports.router)

@app.get("/healthz")
def healthz():
    return {"ok": True}
