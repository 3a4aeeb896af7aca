from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from source_structure.routers import project
from source_structure.services import workspace


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Cancel a running scan so shutdown does not wait for the whole walk.
    workspace.get_workspace().runner.shutdown()


app = FastAPI(
    title="Source Structure Server",
    description="API for scanning annotated source trees and exporting cumulative line-count reports.",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for local development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(project.router)

@app.get("/api-status")
async def root():
    return {"message": "Source Structure Server is running. Visit /docs for API documentation."}
