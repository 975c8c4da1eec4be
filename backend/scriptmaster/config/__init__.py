"""
Application configuration and settings
"""

import os
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

# Base directories (created lazily by the writers)
APP_DIR = Path(__file__).parent.parent
BACKEND_DIR = APP_DIR.parent
EXPORT_DIR = Path(os.getenv("SCRIPTMASTER_EXPORT_DIR", str(BACKEND_DIR / "exports")))
DOCUMENT_DIR = Path(os.getenv("SCRIPTMASTER_DOCUMENT_DIR", str(BACKEND_DIR / "documents")))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
JSON_LOGS = os.getenv("JSON_LOGS", "false").lower() == "true"

# API settings
API_TITLE = "ScriptMaster API"
API_DESCRIPTION = "Compose structured English-lesson scripts and export them for production"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173",
    ).split(",")
    if origin.strip()
]

__all__ = [
    "APP_DIR",
    "BACKEND_DIR",
    "EXPORT_DIR",
    "DOCUMENT_DIR",
    "LOG_LEVEL",
    "LOG_FILE",
    "JSON_LOGS",
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
]
