# config.py
import os
from dotenv import load_dotenv

# ----- .env loading (real environment still wins because override=True) -----
basedir = os.path.abspath(os.path.dirname(__file__))
dotenv_path = os.path.join(basedir, ".env")
load_dotenv(dotenv_path=dotenv_path, verbose=True, override=True)
print(f"--- Config: Attempted to load .env from: {dotenv_path} ---")


def _env_list(name, default):
    raw = os.environ.get(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    """Base configuration."""
    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY") or "you-will-never-guess"
    PREFERRED_URL_SCHEME = "https"  # so url_for(..., _external=True) uses https
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # JSON bodies only, 2 MB is plenty

    # CSRF: checked by the main blueprint after login; JSON clients send X-CSRFToken without a Referer
    WTF_CSRF_CHECK_DEFAULT = False
    WTF_CSRF_SSL_STRICT = False

    # Paths
    BASE_DIR = basedir
    INSTANCE_PATH = os.path.join(BASE_DIR, "instance")
    if not os.path.exists(INSTANCE_PATH):
        try:
            os.makedirs(INSTANCE_PATH, exist_ok=True)
            print(f"Created instance folder at: {INSTANCE_PATH}")
        except OSError as e:
            print(f"Error creating instance folder at {INSTANCE_PATH}: {e}")

    # Database (hosting platforms inject DATABASE_URL; fallback for local dev)
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or \
        "sqlite:///" + os.path.join(INSTANCE_PATH, "app.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CORS (comma separated origins, "*" for any)
    CORS_ORIGINS = _env_list("CORS_ORIGINS", ["*"])
    CORS_SUPPORTS_CREDENTIALS = os.environ.get("CORS_SUPPORTS_CREDENTIALS", "false").lower() == "true"

    # OpenAI
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    OPENAI_TEXT_MODEL = os.environ.get("OPENAI_TEXT_MODEL", "gpt-4o-mini")
    OPENAI_TEXT_TEMPERATURE = float(os.environ.get("OPENAI_TEXT_TEMPERATURE", "0.7"))
    OPENAI_IMAGE_MODEL = os.environ.get("OPENAI_IMAGE_MODEL", "dall-e-3")
    OPENAI_IMAGE_SIZE = os.environ.get("OPENAI_IMAGE_SIZE", "1024x1024")
    OPENAI_TIMEOUT = float(os.environ.get("OPENAI_TIMEOUT", "120"))
    ALLOWED_IMAGE_MODELS = _env_list("ALLOWED_IMAGE_MODELS", ["dall-e-3", "dall-e-2", "gpt-image-1"])

    # Image provider: "openai" or "http" (generic JSON image API)
    IMAGE_PROVIDER = os.environ.get("IMAGE_PROVIDER", "openai").lower()
    IMAGE_API_URL = os.environ.get("IMAGE_API_URL")
    IMAGE_API_KEY = os.environ.get("IMAGE_API_KEY")
    IMAGE_WIDTH = int(os.environ.get("IMAGE_WIDTH", "1024"))
    IMAGE_HEIGHT = int(os.environ.get("IMAGE_HEIGHT", "768"))
    HTTP_TIMEOUT = float(os.environ.get("HTTP_TIMEOUT", "60"))

    # S3 / MinIO file hosting
    S3_ENDPOINT = os.environ.get("S3_ENDPOINT")
    S3_ACCESS_KEY = os.environ.get("S3_ACCESS_KEY")
    S3_SECRET_KEY = os.environ.get("S3_SECRET_KEY")
    S3_BUCKET = os.environ.get("S3_BUCKET")
    S3_REGION = os.environ.get("S3_REGION", "us-east-1")
    S3_USE_SSL = os.environ.get("S3_USE_SSL", "false").lower() == "true"
    # Public base URL of the bucket; when unset images are served through /files/<key>
    S3_PUBLIC_BASE_URL = os.environ.get("S3_PUBLIC_BASE_URL")

    # Logging (files land in instance/)
    PROMPT_LOG_FILE = os.environ.get("PROMPT_LOG_FILE") or os.path.join(INSTANCE_PATH, "prompts.log")


# --- Sanity checks (non-fatal, just helpful logs) ---
if not os.environ.get("OPENAI_API_KEY"):
    print("--- Config WARNING: OPENAI_API_KEY is not set ---")
if os.environ.get("IMAGE_PROVIDER", "openai").lower() == "http" and not os.environ.get("IMAGE_API_URL"):
    print("--- Config WARNING: IMAGE_PROVIDER is 'http' but IMAGE_API_URL is not set ---")
if not os.environ.get("S3_ENDPOINT"):
    print("--- Config WARNING: S3_ENDPOINT not set (MinIO) ---")
if not os.environ.get("S3_BUCKET"):
    print("--- Config WARNING: S3_BUCKET not set (MinIO) ---")
