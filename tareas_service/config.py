from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from repo root .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")

# Empty sqlite URL means a private in-memory database, gone on restart.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]
