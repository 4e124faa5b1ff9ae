from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Classe pour gérer la configuration de l'application.
    Les variables sont chargées depuis l'environnement ou le fichier .env.
    """
    DATABASE_URL: str = "sqlite:///./prescriptions.db"

    # --- Intelligence Artificielle (fournisseur factice pour l'instant) ---
    AI_API_KEY: Optional[str] = None
    AI_PROVIDER: str = "openai"

    # --- Journalisation ---
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # --- API ---
    CORS_ORIGINS: List[str] = ["*"]
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 1000

    class Config:
        env_file = ".env"


settings = Settings()
