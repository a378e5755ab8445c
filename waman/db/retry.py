"""
➡️ But : Ré-exécuter un appel DB après une erreur transitoire (connexion coupée,
prepared statement déjà existant derrière un pooler type PgBouncer).

RetryExecutor.execute(operation) :
- tentative n réussie -> résultat renvoyé tel quel ;
- erreur transitoire et n < max_attempts -> reset du pool (best-effort),
  attente base_delay * n (backoff linéaire), tentative n + 1 ;
- sinon -> l'erreur d'origine est relancée, inchangée.

L'executor ne connaît rien des ressources : il reçoit un callable sans argument.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import DBAPIError, DisconnectionError, IntegrityError

from waman.core.errors import FatalStorageError, TransientStorageError, WamanError

T = TypeVar("T")

logger = logging.getLogger("waman.db.retry")

# SQLSTATE : classe 08 = connexion ; 26000 / 42P05 = prepared statement invalide / dupliqué
_TRANSIENT_SQLSTATE_PREFIXES = ("08",)
_TRANSIENT_SQLSTATES = {"26000", "42P05"}

# signatures historiques (messages du driver)
_TRANSIENT_MESSAGES = ("prepared statement", "connection")


def _sqlstate(error: BaseException) -> Optional[str]:
    orig = getattr(error, "orig", None)
    if orig is None:
        return None
    # psycopg2 -> pgcode ; psycopg 3 -> sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_transient_error(error: BaseException) -> bool:
    """True si l'erreur relève de la classe connexion / prepared statement."""
    if isinstance(error, TransientStorageError):
        return True
    if isinstance(error, (FatalStorageError, IntegrityError, WamanError)):
        return False

    if isinstance(error, DisconnectionError):
        return True
    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return True
        state = _sqlstate(error)
        if state and (state in _TRANSIENT_SQLSTATES or state.startswith(_TRANSIENT_SQLSTATE_PREFIXES)):
            return True

    message = str(error).lower()
    return any(signature in message for signature in _TRANSIENT_MESSAGES)


class RetryExecutor:
    """
    Exécute une opération de stockage jusqu'à max_attempts fois.

    - `reset_connection` : callable appelé avant une nouvelle tentative (reset du pool)
    - `base_delay` : délai de base en secondes ; attente avant la tentative n+1 = base_delay * n
    - `sleep` : injectable (tests)
    """

    def __init__(
        self,
        reset_connection: Callable[[], None],
        *,
        max_attempts: int = 3,
        base_delay: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.reset_connection = reset_connection
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.sleep = sleep

    def execute(self, operation: Callable[[], T], max_attempts: Optional[int] = None) -> T:
        attempts = max_attempts or self.max_attempts
        attempt = 1
        while True:
            try:
                return operation()
            except Exception as exc:
                retryable = is_transient_error(exc)
                logger.warning(
                    "Storage attempt %s/%s failed: %s",
                    attempt,
                    attempts,
                    exc,
                    extra={"attempt": attempt},
                )
                if not retryable or attempt >= attempts:
                    raise

                self._reset()
                delay = self.base_delay * attempt
                logger.info(
                    "Retrying storage operation in %.0f ms",
                    delay * 1000,
                    extra={"attempt": attempt + 1, "delay_ms": int(delay * 1000)},
                )
                self.sleep(delay)
                attempt += 1

    def _reset(self) -> None:
        try:
            self.reset_connection()
        except Exception:
            # best-effort : un reset raté ne doit pas masquer l'erreur d'origine
            logger.warning("Connection reset failed", exc_info=True)
