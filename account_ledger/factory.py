"""
Ledger Factory

DESIGN DECISION: There is no module-level ledger instance. Whoever
needs a ledger builds one here (or constructs Ledger directly) and
owns its lifecycle.
"""

from typing import Optional

from account_ledger.audit import AuditLogger
from account_ledger.config import LedgerSettings, get_settings
from account_ledger.ledger import Ledger
from account_ledger.services.storage import JsonFileStore, KeyValueStore


def create_ledger(
    owner: Optional[str] = None,
    store: Optional[KeyValueStore] = None,
    settings: Optional[LedgerSettings] = None,
) -> Ledger:
    """
    Build a ledger wired to its store and audit logger.

    Args:
        owner: Account holder; the configured owner_name if None
        store: Key-value store; a JsonFileStore at store_path if None
        settings: Settings to use; get_settings() if None

    Returns:
        A hydrated Ledger
    """
    settings = settings or get_settings()
    if store is None:
        store = JsonFileStore(settings.store_path)

    return Ledger(
        owner or settings.owner_name,
        store,
        audit_logger=AuditLogger(),
        settings=settings,
    )
