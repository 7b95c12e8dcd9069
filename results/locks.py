"""Verrou de traitement par (examen, niveau) pour sérialiser agrégation + classement."""

import logging
import socket
import uuid
from contextlib import contextmanager
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from .exceptions import ScopeBusy
from .models import ResultProcessingLock

logger = logging.getLogger(__name__)


def scope_key(examination_id, class_level_id):
    # la section n'entre pas dans la clé: un traitement classe entière et un
    # traitement par section touchent les mêmes résultats
    return f"results:exam:{examination_id}:class:{class_level_id}"


def acquire_scope_lock(key, timeout=None):
    """
    Prend le bail si libre ou expiré.
    Retourne l'identifiant du détenteur, ou None si déjà pris.
    """
    timeout = timeout or getattr(settings, "RESULTS_LOCK_TIMEOUT", 300)
    now = timezone.now()
    owner = f"{socket.gethostname()}-{uuid.uuid4().hex[:12]}"

    ResultProcessingLock.objects.get_or_create(
        key=key, defaults={"locked_until": now - timedelta(seconds=1), "locked_by": ""}
    )
    # UPDATE conditionnel: un seul worker peut gagner
    acquired = (ResultProcessingLock.objects
                .filter(key=key, locked_until__lt=now)
                .update(locked_until=now + timedelta(seconds=timeout), locked_by=owner))
    if acquired:
        logger.info(f"Acquired results lock {key} ({owner})")
        return owner
    logger.warning(f"Results lock {key} is already held")
    return None


def release_scope_lock(key, owner):
    (ResultProcessingLock.objects
     .filter(key=key, locked_by=owner)
     .update(locked_until=timezone.now() - timedelta(seconds=1)))
    logger.info(f"Released results lock {key} ({owner})")


@contextmanager
def scope_lock(examination_id, class_level_id):
    key = scope_key(examination_id, class_level_id)
    owner = acquire_scope_lock(key)
    if owner is None:
        lock = ResultProcessingLock.objects.filter(key=key).first()
        raise ScopeBusy(
            "Results for this examination and class are already being processed. Retry later.",
            locked_until=lock.locked_until.isoformat() if lock else None,
        )
    try:
        yield owner
    finally:
        release_scope_lock(key, owner)
