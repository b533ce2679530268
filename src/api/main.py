from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import os

from src.api.service import SupersededRequest, VisualizationService
from src.api.schemas import SceneResponse, StatusResponse, ThemeResponse, VisualizeRequest
from src.api.theme import DisplayMode, palette_for
from src.github.client import GitHubApi, RepositoryClient
from src.github.errors import FetchError, ValidationError
from src.github.urls import DEFAULT_HOST

import logging

# Configure Logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Repository Scene API")

# Allow CORS
# In production, set ALLOWED_ORIGINS to a comma-separated list of domains
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "*")
allowed_origins = [origin.strip() for origin in allowed_origins_env.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize Service
# The token is read here once and handed to the API client explicitly.
github_token = os.getenv("GITHUB_TOKEN")
if not github_token:
    logger.warning("GITHUB_TOKEN not set. Using unauthenticated requests (limited rate).")

api = GitHubApi(
    token=github_token,
    base_url=os.getenv("GITHUB_API_URL", GitHubApi.DEFAULT_BASE_URL),
    timeout=float(os.getenv("GITHUB_TIMEOUT", str(GitHubApi.DEFAULT_TIMEOUT))),
)
service = VisualizationService(RepositoryClient(api, host=os.getenv("GITHUB_HOST", DEFAULT_HOST)))

@app.on_event("shutdown")
async def shutdown_event():
    await service.client.api.aclose()

@app.post("/api/scene", response_model=SceneResponse)
async def create_scene(req: VisualizeRequest):
    """Fetch a repository and build a new scene snapshot."""
    try:
        snapshot = await service.visualize(req.url)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FetchError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except SupersededRequest as e:
        raise HTTPException(status_code=409, detail=str(e))
    return service.to_response(snapshot)

@app.get("/api/scene", response_model=SceneResponse)
def get_scene():
    """Get the current snapshot."""
    scene = service.current()
    if not scene:
        raise HTTPException(status_code=404, detail="No scene loaded")
    return scene

@app.get("/api/status", response_model=StatusResponse)
def get_status():
    return service.get_status()

@app.get("/api/theme", response_model=ThemeResponse)
def get_theme(mode: DisplayMode = DisplayMode.STANDARD):
    return ThemeResponse(mode=mode, colors=palette_for(mode))

@app.get("/health")
def health_check():
    return {"status": "ok", "state": service.store.status.state.value}
