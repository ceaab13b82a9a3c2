import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core import config
from app.core.logging_config import setup_logging, sanitize_log_data
from app.api.routes import health, resume_versions

logger = logging.getLogger(__name__)



# ============================================
# ✅ LOGGING + MIGRATIONS
# ============================================

setup_logging(config.LOG_LEVEL, config.LOG_FILE)
startup_settings = sanitize_log_data({
    "database_url": config.DATABASE_URL,
    "secret_key": config.SECRET_KEY,
    "run_migrations": config.RUN_MIGRATIONS,
    "version_retention_default_keep": config.VERSION_RETENTION_DEFAULT_KEEP,
    "version_create_max_retries": config.VERSION_CREATE_MAX_RETRIES,
})
logger.info(f"Starting Resume History API: {startup_settings}")

if config.RUN_MIGRATIONS:
    from app.db.migrate import run_migrations
    run_migrations()



# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Resume History API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)



# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(resume_versions.router)


@app.get("/")
def root():
    return {"status": "Resume History API running"}
