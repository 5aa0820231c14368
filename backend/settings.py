import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file in the backend folder
backend_dir = Path(__file__).parent
env_path = backend_dir / ".env"
load_dotenv(env_path)

SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY")
if not SESSION_SECRET_KEY:  # pragma: no cover
    raise ValueError("SESSION_SECRET_KEY must be set")

API_PREFIX = os.getenv("API_PREFIX", "")
BACKEND_DIR = Path(__file__).parent
DATABASE_PATH = BACKEND_DIR / "animeweb.sqlite"
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATABASE_PATH}")
PROJECT_PATH = BACKEND_DIR.parent

# --- Social ---
FRIEND_REQUEST_MESSAGE_MAX_LENGTH = int(
    os.getenv("FRIEND_REQUEST_MESSAGE_MAX_LENGTH", "500")
)
USER_SEARCH_MIN_QUERY = int(os.getenv("USER_SEARCH_MIN_QUERY", "2"))
USER_SEARCH_MAX_RESULTS = int(os.getenv("USER_SEARCH_MAX_RESULTS", "50"))
