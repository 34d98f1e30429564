"""Monthly budget stored as budget.json ({"YYYY-MM": {category: amount}})."""

import json
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from vulkan.exceptions import ResourceNotFoundError

BUDGET_FILENAME = "budget.json"

EXAMPLE_BUDGET: Dict[str, Dict[str, float]] = {
    "2025-12": {
        "Housing": 1000,
        "Shopping": 100,
        "Transport": 50,
        "Health": 50,
        "Food": 200,
        "Admin": 10,
    }
}


def current_month(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{today.year}-{today.month:02d}"


class BudgetStore:
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / BUDGET_FILENAME
        self._lock = threading.Lock()

    def _save(self, budget: Dict[str, Any]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(budget, indent=2), encoding="utf-8")

    def _load(self) -> Dict[str, Any]:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            budget = json.loads(json.dumps(EXAMPLE_BUDGET))
            self._save(budget)
            return budget

    def load(self) -> Dict[str, Any]:
        """Budget by month; an example budget is written on first use."""
        with self._lock:
            return self._load()

    def duplicate_last_month(self, target_month: Optional[str] = None) -> Dict[str, Any]:
        """Copy the latest month's budget to target_month (default: current month)."""
        with self._lock:
            budget = self._load()
            months = sorted(budget)
            if not months:
                raise ResourceNotFoundError(
                    code="NO_BUDGET",
                    message="No budget data found to duplicate",
                )

            source = months[-1]
            target = target_month or current_month()
            budget[target] = dict(budget[source])
            self._save(budget)

        return {
            "sourceMonth": source,
            "targetMonth": target,
            "duplicatedBudget": budget[target],
        }
