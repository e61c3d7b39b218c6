import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./identity.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    BEARER_TOKEN_TTL_DAYS = int(data.get("BEARER_TOKEN_TTL_DAYS", 7))
    SESSION_TTL_DAYS = int(data.get("SESSION_TTL_DAYS", 7))
    VERIFICATION_TTL_HOURS = int(data.get("VERIFICATION_TTL_HOURS", 24))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    LOCK_THRESHOLD = int(data.get("LOCK_THRESHOLD", 5))
    LOCK_DURATION_MINUTES = int(data.get("LOCK_DURATION_MINUTES", 120))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == "production"
