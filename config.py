from dotenv import load_dotenv
import os

load_dotenv()


def _database_uri():
    return (
        os.getenv("SQLALCHEMY_DATABASE_URI")
        or os.getenv("DATABASE_URL")
        or os.getenv("PG_URL")
        or "sqlite:///flamingo.db"
    )


def _engine_options(uri):
    if not uri.startswith("postgresql"):
        return {}

    # Pool settings for managed PostgreSQL (idle connections get dropped)
    options = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_size': 5,
        'max_overflow': 10,
        'pool_timeout': 30,
        'connect_args': {'connect_timeout': 10},
    }
    if os.getenv("PGSSL", "false").lower() == "true":
        options['connect_args']['sslmode'] = 'require'
    return options


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY") or os.getenv("SESSION_SECRET")
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI)

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.getenv("FLASK_ENV") == "production"
    SESSION_MINUTES = int(os.getenv("SESSION_MINUTES", "30"))

    JWT_SECRET = os.getenv("JWT_SECRET")
    JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "168"))

    BASE_PUBLIC_URL = os.getenv("BASE_PUBLIC_URL", "")
    APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:4000")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # MyFatoorah
    MF_API_URL = os.getenv("MF_API_URL", "https://apitest.myfatoorah.com")
    MF_TOKEN = os.getenv("MF_TOKEN")
    MF_PAYMENT_METHOD_ID = int(os.getenv("MF_PAYMENT_METHOD_ID", "2"))
    MF_CURRENCY = os.getenv("MF_CURRENCY", "KWD")
    MF_TIMEOUT = float(os.getenv("MF_TIMEOUT", "30"))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET = "test-jwt-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SESSION_COOKIE_SECURE = False
    APP_BASE_URL = "http://testserver"
    BASE_PUBLIC_URL = "http://cdn.test"
    MF_API_URL = "https://mf.test"
    MF_TOKEN = "test-mf-token"
    LOG_LEVEL = "DEBUG"
