import os
from dotenv import load_dotenv

load_dotenv()


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Media
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    MEDIA_URL_PREFIX = "/uploads"
    MAX_CONTENT_LENGTH = 100 * 1024 * 1024
    THUMBNAIL_MAX_SIZE = (400, 400)

    # Listing
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100

    # "authenticated": any signed-in caller may read drafts
    # "staff": only editors and above may
    DRAFT_VISIBILITY = os.getenv("DRAFT_VISIBILITY", "authenticated")

    CONFLICT_RETRY_ATTEMPTS = 3
    COMMENTS_AUTO_APPROVE = True


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///blogcms-dev.db")
    LOG_LEVEL = "DEBUG"


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "testing-secret-key-that-is-long-enough"
    JWT_SECRET_KEY = "testing-jwt-secret-key-that-is-long-enough"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
