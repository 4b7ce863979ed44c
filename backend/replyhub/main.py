import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from replyhub.api import auth, sandbox_environments, sandbox_scenarios, sandbox_emulation, sandbox_connections
from replyhub.config import get_settings
from replyhub.db.postgres import engine, Base, AsyncSessionLocal
from replyhub.services.sandbox import get_request_logger
from replyhub.services.sandbox.provisioning import ensure_demo_environment
import replyhub.models  # noqa: F401  (register tables on Base.metadata)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables and the demo environment
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        await ensure_demo_environment(db)

    yield

    # Shutdown: flush pending request logs
    await get_request_logger().drain()
    await engine.dispose()


app = FastAPI(
    title="ReplyHub API",
    description="Review management with sandboxed App Store, Google Play and OpenAI APIs",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])

# Sandbox management
app.include_router(sandbox_environments.router, prefix="/api/sandbox", tags=["sandbox"])
app.include_router(sandbox_scenarios.router, prefix="/api/sandbox", tags=["sandbox"])
app.include_router(sandbox_connections.router, prefix="/api/sandbox", tags=["sandbox"])

# Emulated third-party APIs
app.include_router(sandbox_emulation.router, prefix="/api", tags=["sandbox-emulation"])


@app.get("/health")
async def health():
    return {"status": "healthy"}
