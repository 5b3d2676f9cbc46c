import os
import logging
import logging.config
from pathlib import Path

# Base Paths
APP_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = APP_DIR.parent

# Logging Setup
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_FILE_PATH = os.getenv(
    "LOG_FILE_PATH",
    str((PROJECT_ROOT / "logs" / "focusguard.log").resolve()),
)

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": LOG_FORMAT,
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": LOG_LEVEL,
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "focusguard": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        # Let uvicorn log to console using its own handlers
        "uvicorn.error": {"level": "INFO"},
        "uvicorn.access": {"level": "INFO"},
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

# An empty LOG_FILE_PATH keeps logging on the console only
if LOG_FILE_PATH:
    Path(LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)
    LOGGING_CONFIG["handlers"]["file"] = {
        "class": "logging.handlers.RotatingFileHandler",
        "level": LOG_LEVEL,
        "formatter": "standard",
        "filename": LOG_FILE_PATH,
        "maxBytes": 10 * 1024 * 1024,  # 10 MB
        "backupCount": 5,
        "encoding": "utf8",
    }
    LOGGING_CONFIG["loggers"]["focusguard"]["handlers"].append("file")

logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger("focusguard")


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Security / domains
ALLOWED_HOSTS = _split_csv(os.getenv("ALLOWED_HOSTS", "*"))

CORS_ORIGINS = _split_csv(
    os.getenv("CORS_ORIGINS", "http://localhost:8000")
)

# Origin of this application, pinned into every embed URL
APP_ORIGIN = os.getenv("APP_ORIGIN", "http://localhost:8000")

# -----------------------------------------------------------------------------
# Validation Policy
# -----------------------------------------------------------------------------

ALLOWED_VIDEO_DOMAINS = _split_csv(
    os.getenv(
        "ALLOWED_VIDEO_DOMAINS",
        "youtube.com,youtu.be,www.youtube.com,m.youtube.com",
    )
)
BLOCKED_PROTOCOLS = _split_csv(
    os.getenv("BLOCKED_PROTOCOLS", "javascript:,data:,vbscript:,file:")
)
STRICT_DOMAIN_MATCH = _env_flag("STRICT_DOMAIN_MATCH")

MAX_URL_LENGTH = int(os.getenv("MAX_URL_LENGTH", "2048"))
MAX_INPUT_LENGTH = int(os.getenv("MAX_INPUT_LENGTH", "1000"))

# Rate limiting
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "10"))  # requests per window
RATE_LIMIT_WINDOW = float(os.getenv("RATE_LIMIT_WINDOW", "60"))  # seconds

# Uploads
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(100 * 1024 * 1024)))  # 100MB default
ALLOWED_UPLOAD_TYPES = _split_csv(
    os.getenv(
        "ALLOWED_UPLOAD_TYPES",
        "video/mp4,video/webm,video/ogg,video/quicktime",
    )
)
ALLOWED_UPLOAD_EXTENSIONS = _split_csv(
    os.getenv("ALLOWED_UPLOAD_EXTENSIONS", ".mp4,.webm,.ogg,.mov,.avi")
)

# Environment
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
IS_PRODUCTION = ENVIRONMENT == "production"
DEBUG = not IS_PRODUCTION
