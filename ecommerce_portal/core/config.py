import os

from dotenv import load_dotenv

# Load .env from the project root
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ecommerce_portal.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_TEST = ENV_NORMALIZED == "test"
IS_PROD = ENV_NORMALIZED in {"prod", "production"}
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

# Auth (JWT carried in the user_token cookie)
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24)))

USER_TOKEN_COOKIE = os.getenv("USER_TOKEN_COOKIE", "user_token")
USER_TOKEN_COOKIE_SECURE = _env_flag("USER_TOKEN_COOKIE_SECURE", "0" if IS_DEV else "1")
USER_TOKEN_COOKIE_SAMESITE = os.getenv(
    "USER_TOKEN_COOKIE_SAMESITE",
    "lax" if IS_DEV else "none",
).strip().lower()
if USER_TOKEN_COOKIE_SAMESITE not in {"lax", "strict", "none"}:
    USER_TOKEN_COOKIE_SAMESITE = "lax" if IS_DEV else "none"
USER_TOKEN_COOKIE_DOMAIN = os.getenv("USER_TOKEN_COOKIE_DOMAIN", "").strip() or None

# Object storage (DigitalOcean Spaces / any S3-compatible endpoint)
SPACES_ENDPOINT_URL = os.getenv("SPACES_ENDPOINT_URL", "https://sgp1.digitaloceanspaces.com").strip()
SPACES_REGION = os.getenv("SPACES_REGION", "sgp1").strip()
SPACES_ACCESS_KEY_ID = os.getenv("SPACES_ACCESS_KEY_ID", "").strip()
SPACES_SECRET_ACCESS_KEY = os.getenv("SPACES_SECRET_ACCESS_KEY", "").strip()
SPACES_BUCKET_NAME = os.getenv("SPACES_BUCKET_NAME", "").strip()
SPACES_PUBLIC_URL = os.getenv("SPACES_PUBLIC_URL", "").strip().rstrip("/")
SPACES_OBJECT_ACL = os.getenv("SPACES_OBJECT_ACL", "public-read").strip()

# Catalogue
LATEST_PRODUCTS_LIMIT = int(os.getenv("LATEST_PRODUCTS_LIMIT", "10"))
MAX_IMAGE_SIZE_BYTES = int(os.getenv("MAX_IMAGE_SIZE_BYTES", str(5 * 1024 * 1024)))

# Startup admin bootstrap
DEV_ADMIN_EMAIL = os.getenv("DEV_ADMIN_EMAIL", "admin@example.com").strip().lower()
DEV_ADMIN_PASSWORD = os.getenv("DEV_ADMIN_PASSWORD", "").strip()
DEV_ADMIN_FIRST_NAME = os.getenv("DEV_ADMIN_FIRST_NAME", "Portal").strip()
DEV_ADMIN_LAST_NAME = os.getenv("DEV_ADMIN_LAST_NAME", "Admin").strip()
