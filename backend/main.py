"""
Hunk Staging Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, diff, git
from services.config_manager import ConfigManager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    print("[Backend] Starting Hunk Staging Backend...")
    config_manager = ConfigManager.get_instance()
    print(f"[Backend] ConfigManager initialized ({config_manager.config_file})")

    yield
    print("[Backend] Shutting down Hunk Staging Backend...")


app = FastAPI(
    title="Hunk Staging Backend",
    description="Diff, change-group and partial staging service for source control panels",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for the local editor UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(git.router, prefix="/api/git", tags=["git"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "hunk-stage-backend"}


def run():
    """Run the server with the configured host and port"""
    import uvicorn

    server = ConfigManager.get_instance().get_section("server")
    uvicorn.run(app, host=server.get("host", "127.0.0.1"), port=int(server.get("port", 9700)))


if __name__ == "__main__":
    run()
