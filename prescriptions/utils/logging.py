import logging
import os
import sys

from ..config import settings


def setup_logging(log_dir: str = None, level: str = None):
    """
    Configure le logging pour écrire dans un fichier et sur la console.
    """
    log_dir = log_dir or settings.LOG_DIR
    level = (level or settings.LOG_LEVEL).upper()

    # Créer le dossier de logs s'il n'existe pas
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    log_file = os.path.join(log_dir, "prescriptions.log")

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Empêcher les double logs si la fonction est appelée plusieurs fois
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - [%(levelname)s] - %(message)s'
    )

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logging.info("=" * 50)
    logging.info(f"Logging configuré (niveau {level}). Fichier : {log_file}")
    logging.info("=" * 50)
