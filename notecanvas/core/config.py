from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://notecanvas:notecanvas@db:5432/notecanvas")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "10080"))  # 7 jours
    JWT_REFRESH_EXPIRE_MIN = int(getenv("JWT_REFRESH_EXPIRE_MIN", "43200"))  # 30 jours
    FRONTEND_URL = getenv("FRONTEND_URL", "http://localhost:5173")
    # URL de l'API utilisée par le client de l'éditeur
    API_URL = getenv("API_URL", "http://localhost:8000")

settings = Settings()
