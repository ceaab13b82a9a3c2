import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./resume_history.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-to-a-random-secret-key")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/resume_history.log")  # empty string disables file logging

# ✅ CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

# ✅ Version history
VERSION_RETENTION_DEFAULT_KEEP = int(os.getenv("VERSION_RETENTION_DEFAULT_KEEP", "10"))
VERSION_CREATE_MAX_RETRIES = int(os.getenv("VERSION_CREATE_MAX_RETRIES", "3"))
RESTORE_SNAPSHOT_NAME = "Auto-save before restore"
