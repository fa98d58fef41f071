"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Rendering ---
MAX_URL_DISPLAY_LENGTH: int = int(os.getenv("MAX_URL_DISPLAY_LENGTH", "50"))
SHOW_SOURCE_TOGGLE_DEFAULT: bool = os.getenv("SHOW_SOURCE_TOGGLE_DEFAULT", "false").lower() == "true"

# --- Pipeline ---
RENDER_CACHE_SIZE: int = int(os.getenv("RENDER_CACHE_SIZE", "512"))
VALIDATE_RENDER_TREE: bool = os.getenv("VALIDATE_RENDER_TREE", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# --- Privacy ---
MAX_BODY_LOG_CHARS: int = int(os.getenv("MAX_BODY_LOG_CHARS", "200"))
