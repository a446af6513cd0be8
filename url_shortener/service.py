from __future__ import annotations

import logging
from typing import Optional

from .alias import ALIAS_LENGTH, generate_alias
from .db import Database
from .errors import AliasExists
from .models import save_url

log = logging.getLogger(__name__)

MAX_ALIAS_ATTEMPTS = 5


def shorten(db: Database, url: str, user: str, alias: Optional[str] = None) -> str:
    """Store ``url`` under ``alias`` (or a generated one) and return the alias used.

    A caller-chosen alias gets exactly one attempt. Generated aliases are
    retried on collision up to MAX_ALIAS_ATTEMPTS times.
    """
    if alias:
        row_id = save_url(db, alias, url, user)
        log.info("url saved: alias=%s id=%s", alias, row_id)
        return alias

    for attempt in range(1, MAX_ALIAS_ATTEMPTS + 1):
        candidate = generate_alias(ALIAS_LENGTH)
        try:
            row_id = save_url(db, candidate, url, user)
        except AliasExists:
            log.warning("generated alias collided (attempt %d/%d)", attempt, MAX_ALIAS_ATTEMPTS)
            continue
        log.info("url saved: alias=%s id=%s", candidate, row_id)
        return candidate

    raise AliasExists(f"no free alias after {MAX_ALIAS_ATTEMPTS} attempts")
