from os import getenv

class Settings:
    APP_NAME = getenv("APP_NAME", "TaskManager API")
    APP_ENV = getenv("APP_ENV", "development")
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./taskmanager.db")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_ALGORITHM = getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_DAYS = int(getenv("JWT_EXPIRE_DAYS", "7"))  # token valide 7 jours
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

settings = Settings()
