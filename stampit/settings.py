import os

from dotenv import load_dotenv

# Load .env file with explicit UTF-8 encoding
load_dotenv(encoding='utf-8')

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./stampit.db")

SECRET_KEY = os.getenv("SECRET_KEY", "stampit-dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))

VIEW_CACHE_TTL_SECONDS = int(os.getenv("VIEW_CACHE_TTL_SECONDS", "300"))
VIEW_CACHE_MAXSIZE = int(os.getenv("VIEW_CACHE_MAXSIZE", "1024"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,https://localhost:3000,http://127.0.0.1:3000,https://127.0.0.1:3000",
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
