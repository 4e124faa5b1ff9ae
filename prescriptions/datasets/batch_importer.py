"""
Client d'import par lots pour les endpoints POST /api/<entité>/import.

Les éléments sont envoyés séquentiellement par lots de taille fixe ; une
progression (avec estimation du temps restant) est publiée avant et après
chaque lot. Un lot en échec compte entièrement en erreurs et l'import
continue avec le lot suivant.
"""

import logging
import math
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

BATCH_SIZE = 100
BATCH_DELAY = 0.05
REQUEST_TIMEOUT = 60


@dataclass
class ImportProgress:
    total: int
    processed: int = 0
    imported: int = 0
    errors: int = 0
    current_batch: int = 0
    total_batches: int = 0
    start_time: float = 0.0
    estimated_time_remaining: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BatchImporter:
    """
    :param base_url: URL du serveur (ex. 'http://localhost:8000').
    :param endpoint: Chemin de l'import (ex. '/api/diseases/import').
    :param payload_key: Clé de la liste dans le corps ('diseases', 'items', ...).
    :param session: Session requests à réutiliser (une nouvelle par défaut).
    """

    def __init__(self, base_url: str, endpoint: str, payload_key: str = "items",
                 batch_size: int = BATCH_SIZE, delay: float = BATCH_DELAY,
                 session: Optional[requests.Session] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if batch_size < 1:
            raise ValueError("batch_size doit être supérieur ou égal à 1")
        self.url = base_url.rstrip("/") + endpoint
        self.payload_key = payload_key
        self.batch_size = batch_size
        self.delay = delay
        self.session = session or requests.Session()
        self.clock = clock
        self.sleep = sleep

    def _send(self, batch: List[Dict[str, Any]], replace_existing: bool) -> Dict[str, Any]:
        response = self.session.post(
            self.url,
            json={self.payload_key: batch, "replace_existing": replace_existing},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        return response.json()

    def run(self, items: List[Dict[str, Any]], replace_existing: bool = False,
            on_progress: Optional[Callable[[ImportProgress], None]] = None) -> ImportProgress:
        total = len(items)
        total_batches = math.ceil(total / self.batch_size)
        progress = ImportProgress(total=total, total_batches=total_batches, start_time=self.clock())

        def publish():
            if on_progress:
                on_progress(progress)

        publish()

        for i in range(total_batches):
            batch_start = i * self.batch_size
            batch_end = min(batch_start + self.batch_size, total)
            batch = items[batch_start:batch_end]

            elapsed = self.clock() - progress.start_time
            avg_per_batch = elapsed / i if i > 0 else 0.0
            progress.current_batch = i + 1
            progress.processed = batch_start
            progress.estimated_time_remaining = avg_per_batch * (total_batches - i)
            publish()

            try:
                result = self._send(batch, replace_existing)
                progress.imported += int(result.get("imported") or 0)
                progress.errors += int(result.get("errors") or 0)
            except (requests.RequestException, ValueError) as e:
                logger.error(f"❌ Lot {i + 1}/{total_batches} en échec : {e}")
                progress.errors += len(batch)

            progress.processed = batch_end
            publish()

            if i < total_batches - 1:
                self.sleep(self.delay)

        logger.info(
            f"✅ Import terminé vers {self.url} : {progress.imported} importés, "
            f"{progress.errors} erreurs sur {total}"
        )
        return progress
