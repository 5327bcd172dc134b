"""
État partagé explicite : indicateur de chargement et générations de requêtes.

Une instance de chaque par session navigateur (LoadingStore) ou par page
(RequestGenerations), transmise aux services plutôt qu'un singleton global.
"""

import threading
from typing import Callable, Optional

LoadingListener = Callable[[bool], None]


class LoadingStore:
    """Compteur d'appels en cours ; un seul abonné affiche l'indicateur."""

    def __init__(self):
        self._pending = 0
        self._lock = threading.Lock()
        self._listener: Optional[LoadingListener] = None

    @property
    def is_loading(self) -> bool:
        return self._pending > 0

    def subscribe(self, listener: LoadingListener) -> None:
        # remplace l'abonné précédent (le conteneur Streamlit est recréé à chaque run)
        self._listener = listener
        listener(self.is_loading)

    def begin(self) -> None:
        with self._lock:
            self._pending += 1
            changed = self._pending == 1
        if changed:
            self._emit()

    def end(self) -> None:
        with self._lock:
            if self._pending == 0:
                return
            self._pending -= 1
            changed = self._pending == 0
        if changed:
            self._emit()

    def _emit(self) -> None:
        if self._listener is not None:
            self._listener(self.is_loading)


class RequestGenerations:
    """Compteur monotone : seule la réponse de la dernière requête est appliquée."""

    def __init__(self):
        self._latest = 0
        self._lock = threading.Lock()

    @property
    def latest(self) -> int:
        return self._latest

    def next(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, generation: int) -> bool:
        return generation == self._latest
