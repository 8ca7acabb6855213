from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from glamping_inventory.core.log import configure_logging
from glamping_inventory.db.database import create_db_and_tables, engine
from glamping_inventory.db.migrations import sync_inventory_stock
from glamping_inventory.routers.inventory import router as inventory_router

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    await sync_inventory_stock(engine)
    yield


app = FastAPI(
    title="Glamping Inventory API",
    description="Append-only stock ledger for resort products",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Inventory ledger routes
app.include_router(inventory_router, prefix="/inventory", tags=["inventory"])

if __name__ == "__main__":
    uvicorn.run("glamping_inventory.main:app", host="0.0.0.0", port=8000, reload=True)
