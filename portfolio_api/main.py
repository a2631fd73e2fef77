# portfolio_api/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from portfolio_api import config

# -----------
# Logging
# -----------
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("main")

# ----------------------------------------
# DB metadata (DEV ONLY: auto-create tables)
# ----------------------------------------
from portfolio_api.database import Base, engine  # noqa: E402
from portfolio_api import models  # noqa: F401,E402

if config.ENV == "dev" or config.AUTO_MIGRATE:
    Base.metadata.create_all(bind=engine)

# -----------
# Routers (module imports)
# -----------
from portfolio_api.errors import register_exception_handlers  # noqa: E402
from portfolio_api.routes import (  # noqa: E402
    admin,
    auth,
    contact,
    experiences,
    github_profile,
    github_stats,
    health,
    posts,
    profile,
    projects,
    skills,
)
from portfolio_api.services.github_service import GitHubService  # noqa: E402
from portfolio_api.services.stats_cache import StatsCache  # noqa: E402

app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="Portfolio content, GitHub statistics and contact inbox",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,   # must be explicit when credentials=True
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],                    # includes Authorization, Content-Type, etc.
    expose_headers=["Content-Type", "Authorization"],
    max_age=600,
)

register_exception_handlers(app)

# App-scoped services, reached through deps.get_stats_cache / get_github_service
# A refresh claim outlives three GitHub timeouts only if its task was lost
app.state.stats_cache = StatsCache(
    config.GITHUB_STATS_TTL_SECONDS, claim_timeout=config.GITHUB_TIMEOUT_SECS * 3
)
app.state.github_service = GitHubService()


# ------------------------------------------------
# Log method, path and auth header presence
# ------------------------------------------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    auth_present = bool(request.headers.get("authorization"))
    log.info("REQ %s %s  Auth? %s", request.method, request.url.path, auth_present)
    return await call_next(request)


# ------------------------------------------------
# Mount routers
# ------------------------------------------------
for module in (
    auth, health, profile, skills, experiences, posts, projects,
    github_stats, github_profile, contact, admin,
):
    app.include_router(module.router, prefix=config.API_PREFIX)


@app.get("/")
def root():
    return {"name": config.APP_NAME, "version": config.APP_VERSION}


@app.on_event("startup")
async def list_routes():
    log.info("ENV=%s AUTO_MIGRATE=%s GitHub user=%s", config.ENV, config.AUTO_MIGRATE, config.GITHUB_USERNAME)
    for r in app.routes:
        if isinstance(r, APIRoute):
            methods = ",".join(sorted(r.methods))
            log.debug("%-10s %-35s -> %s.%s", methods, r.path, r.endpoint.__module__, r.endpoint.__name__)
