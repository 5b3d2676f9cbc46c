"""
Security Constants

Built-in defaults for the validation policy.
"""

# Video hosts accepted for submissions (matched against the parsed hostname)
ALLOWED_VIDEO_DOMAINS = frozenset({
    "youtube.com",
    "youtu.be",
    "www.youtube.com",
    "m.youtube.com",
})

BLOCKED_PROTOCOLS = frozenset({"javascript:", "data:", "vbscript:", "file:"})
ALLOWED_URL_SCHEMES = frozenset({"http", "https"})

# Maximum lengths for user inputs
MAX_URL_LENGTH = 2048
MAX_INPUT_LENGTH = 1000

# Rate limiting defaults
DEFAULT_RATE_LIMIT = 10  # requests per window
DEFAULT_RATE_WINDOW = 60.0  # seconds

# Upload defaults
MAX_UPLOAD_SIZE = 100 * 1024 * 1024  # 100MB
ALLOWED_UPLOAD_TYPES = frozenset({
    "video/mp4",
    "video/webm",
    "video/ogg",
    "video/quicktime",
})
ALLOWED_UPLOAD_EXTENSIONS = (".mp4", ".webm", ".ogg", ".mov", ".avi")

# Resource references are fixed-format 11 character video IDs
REFERENCE_LENGTH = 11
REFERENCE_PATTERN = r"^[a-zA-Z0-9_-]{11}$"

# Embed target
EMBED_BASE_URL = "https://www.youtube.com/embed/"
DEFAULT_APP_ORIGIN = "http://localhost:8000"

# Tokens
TOKEN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
DEFAULT_TOKEN_LENGTH = 32
MAX_TOKEN_LENGTH = 256

# Request ID header
REQUEST_ID_HEADER = "X-Request-ID"
