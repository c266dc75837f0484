import os

DATA_DIR = os.getenv("VOTING_DATA_DIR", os.path.join(os.getcwd(), "data"))
DATABASE_URL = os.getenv("VOTING_DATABASE_URL", "")

# Shared secret for the admin operations
ADMIN_PASSWORD = os.getenv("VOTING_ADMIN_PASSWORD", "admin123")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("VOTING_CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

DEFAULT_WINDOW_HOURS = int(os.getenv("VOTING_DEFAULT_WINDOW_HOURS", "24"))
LOG_LEVEL = os.getenv("VOTING_LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3001"))
