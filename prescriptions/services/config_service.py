import logging
from sqlalchemy.orm import Session
from typing import Optional

from .. import models

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "ai_enabled": ("true", "Enable AI features"),
    "ai_provider": ("openai", "AI provider (openai, anthropic, etc.)"),
    "search_suggestions_enabled": ("true", "Enable search suggestions"),
    "auto_save_enabled": ("true", "Enable auto-save for prescription templates"),
}


def get_config(db: Session, key: str) -> Optional[str]:
    """
    Renvoie la valeur texte d'un paramètre, ou None s'il n'existe pas.
    """
    entry = db.query(models.AppConfig).filter(models.AppConfig.key == key).first()
    return entry.value if entry else None


def set_config(db: Session, key: str, value: str, description: Optional[str] = None) -> models.AppConfig:
    """
    Crée ou remplace un paramètre.
    """
    entry = db.query(models.AppConfig).filter(models.AppConfig.key == key).first()
    if entry is None:
        entry = models.AppConfig(key=key, value=value, description=description)
        db.add(entry)
    else:
        entry.value = value
        if description is not None:
            entry.description = description
    db.commit()
    db.refresh(entry)
    logger.info(f"Paramètre '{key}' = '{value}'")
    return entry


def seed_defaults(db: Session) -> None:
    """
    Insère les paramètres par défaut absents, sans toucher aux existants.
    """
    existing = {row[0] for row in db.query(models.AppConfig.key).all()}
    missing = [k for k in DEFAULT_CONFIG if k not in existing]
    for key in missing:
        value, description = DEFAULT_CONFIG[key]
        db.add(models.AppConfig(key=key, value=value, description=description))
    if missing:
        db.commit()
        logger.info(f"Configuration par défaut insérée : {', '.join(missing)}")
