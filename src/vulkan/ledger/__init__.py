"""Personal finance ledger: spend entries, categories and monthly budget."""

from vulkan.ledger.budget import BudgetStore, current_month
from vulkan.ledger.categories import CategoryStore
from vulkan.ledger.models import SpendEntry
from vulkan.ledger.store import HEADERS, LedgerStore

__all__ = [
    "SpendEntry",
    "LedgerStore",
    "CategoryStore",
    "BudgetStore",
    "HEADERS",
    "current_month",
]
