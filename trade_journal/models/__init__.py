from trade_journal.models.base import Base
from trade_journal.models.trade import Trade

__all__ = [
    "Base",
    "Trade",
]
