"""
Configuration settings for the User CRUD API
"""

import os
import logging

logger = logging.getLogger(__name__)

# Database configuration
DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
MONGODB_URI = os.getenv("MONGODB_URI", DEFAULT_MONGODB_URI)
MONGODB_DATABASE = os.getenv("MONGODB_DATABASE", "test")  # Used when the URI names no database
MONGODB_USERS_COLLECTION = os.getenv("MONGODB_USERS_COLLECTION", "users")

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PUBLIC_URL = os.getenv("PUBLIC_URL", f"http://localhost:{PORT}")

# API documentation
API_TITLE = os.getenv("API_TITLE", "Washington State University API")
API_VERSION = "1.0.0"
API_DESCRIPTION = "A CRUD API application for Users made with FastAPI and documented with Swagger."

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]

if "MONGODB_URI" not in os.environ:
    logger.warning(f"MONGODB_URI not set - falling back to {DEFAULT_MONGODB_URI}")
