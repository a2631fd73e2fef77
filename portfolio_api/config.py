# portfolio_api/config.py
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# --- Load env from portfolio_api/.env OR .env (whichever exists) ---
# Works whether you run from repo root or portfolio_api/
root = Path(__file__).resolve().parents[1]          # project root
package_env = root / "portfolio_api" / ".env"
root_env = root / ".env"
if package_env.exists():
    load_dotenv(package_env)
elif root_env.exists():
    load_dotenv(root_env)

log = logging.getLogger("config")


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


# === 🌍 App Configuration ===
APP_NAME = "Portfolio API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
ENV = os.getenv("ENV", "dev").lower()
AUTO_MIGRATE = _flag("AUTO_MIGRATE")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Mounted in front of every router; empty keeps the paths at the root
API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")

# === 🌍 CORS Settings ===
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if origin.strip()
]

# === 🔐 Auth ===
JWT_SECRET = os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY")
if not JWT_SECRET:
    JWT_SECRET = "default_jwt_secret_for_development"
    if ENV != "dev":
        log.warning("JWT_SECRET not set; using the development secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_HOURS = int(os.getenv("JWT_EXPIRE_HOURS", "24"))

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")  # bcrypt; wins over ADMIN_PASSWORD
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin User")

# === 🐙 GitHub ===
GITHUB_USERNAME = os.getenv("GITHUB_USERNAME", "octocat")
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN") or None
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
GITHUB_TIMEOUT_SECS = float(os.getenv("GITHUB_TIMEOUT_SECS", "10"))
GITHUB_STATS_TTL_SECONDS = int(os.getenv("GITHUB_STATS_TTL_SECONDS", "3600"))
GITHUB_PROFILE_TTL_SECONDS = int(os.getenv("GITHUB_PROFILE_TTL_SECONDS", "3600"))


# === 🗄️ Database Configuration (robust) ===
def _resolve_sqlite_url(url: str) -> str:
    """Turn 'sqlite:///relative.db' into an absolute path under project root.
    Keep ':memory:' as-is. Ensure absolute paths use 4 slashes."""
    if not url.startswith("sqlite:"):
        return url
    if ":memory:" in url:
        return url
    prefix = "sqlite:///"
    if url.startswith(prefix):
        path = url[len(prefix):]
        if Path(path).is_absolute():
            return f"sqlite:////{Path(path).as_posix().lstrip('/')}"
        abs_path = (root / path).resolve()
        return f"sqlite:////{abs_path.as_posix().lstrip('/')}"
    return url

# Prefer env DATABASE_URL; if missing, persist to ./data/portfolio.db
_env_db = os.getenv("DATABASE_URL")
if _env_db:
    DATABASE_URL = _resolve_sqlite_url(_env_db)
else:
    data_dir = (root / "data").resolve()
    data_dir.mkdir(parents=True, exist_ok=True)
    sqlite_path = (data_dir / "portfolio.db").resolve()
    DATABASE_URL = f"sqlite:////{sqlite_path.as_posix().lstrip('/')}"

# Optional SQL echo for debugging (SQL_ECHO=true)
SQL_ECHO = _flag("SQL_ECHO")
