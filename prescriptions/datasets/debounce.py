import threading
from typing import Any, Callable, Optional

SEARCH_DEBOUNCE_DELAY = 0.3


class Debouncer:
    """
    Retarde l'appel d'une fonction : seul le dernier appel reçu pendant la
    fenêtre 'delay' est exécuté (recherche au fil de la frappe).
    """

    def __init__(self, func: Callable[..., Any], delay: float = SEARCH_DEBOUNCE_DELAY):
        self.func = func
        self.delay = delay
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def __call__(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self.func, args=args, kwargs=kwargs)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """Attend la fin de l'appel en attente, s'il y en a un."""
        with self._lock:
            timer = self._timer
        if timer is not None:
            timer.join()
