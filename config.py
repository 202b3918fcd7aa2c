import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./chat_accounts.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    IS_PRODUCTION = ENVIRONMENT == "production"
    CORS_ORIGINS = data.get(
        "CORS_ORIGINS", ["http://localhost:3000", "http://localhost:3001"]
    )
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    SESSION_MAX_AGE_DAYS = int(data.get("SESSION_MAX_AGE_DAYS", 30))
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "next-auth.session-token")
    SECURE_SESSION_COOKIE_NAME = data.get(
        "SECURE_SESSION_COOKIE_NAME", "__Secure-next-auth.session-token"
    )
    COOKIE_DOMAIN = data.get("COOKIE_DOMAIN", None)
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))
    BLOCKED_EMAIL_DOMAINS = data.get(
        "BLOCKED_EMAIL_DOMAINS", ["tempmail.com", "10minutemail.com"]
    )
    PASSWORD_RESET_TOKEN_TTL_MINUTES = int(
        data.get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 60)
    )
