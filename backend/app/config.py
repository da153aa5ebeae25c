# ENV vars for the designer service
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
    CORS_ORIGINS = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",") if o.strip()
    ]
    PREVIEW_WIDTH = int(os.getenv("PREVIEW_WIDTH", "900"))
    PREVIEW_HEIGHT = int(os.getenv("PREVIEW_HEIGHT", "500"))
    DEFAULT_UNIT = os.getenv("DEFAULT_UNIT", "feet")
    EXPORT_DPI = int(os.getenv("EXPORT_DPI", "72"))
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
