"""CSV-backed spend ledger."""

import csv
import io
import threading
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from vulkan.ledger.models import SpendEntry

CSV_FILENAME = "financial_data.csv"
HEADERS = ["Date", "Name", "Amount", "Category", "SubCategory", "PaymentMethod", "Notes"]

_CENT = Decimal("0.01")


def _round(value: Decimal) -> float:
    return float(value.quantize(_CENT, rounding=ROUND_HALF_UP))


class LedgerStore:
    """Append-only CSV of spend entries inside the data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / CSV_FILENAME
        self._lock = threading.Lock()

    def _ensure_file(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text(",".join(HEADERS) + "\n", encoding="utf-8")

    def add_entry(self, entry: SpendEntry) -> str:
        """Append an entry and return the exact CSV line written."""
        row = [
            entry.date,
            entry.name,
            f"{entry.amount:.2f}",
            entry.category,
            entry.subcategory,
            entry.payment_method,
            entry.notes,
        ]
        buffer = io.StringIO()
        csv.writer(buffer, lineterminator="\n").writerow(row)
        line = buffer.getvalue()

        with self._lock:
            self._ensure_file()
            with self.path.open("a", encoding="utf-8", newline="") as fh:
                fh.write(line)

        return line.rstrip("\n")

    def read_all(self) -> str:
        """Raw CSV content, header included."""
        with self._lock:
            self._ensure_file()
            return self.path.read_text(encoding="utf-8")

    def entries(self) -> List[Dict[str, Any]]:
        rows = list(csv.reader(io.StringIO(self.read_all())))
        entries = []
        for row in rows[1:]:
            if len(row) != len(HEADERS):
                continue
            entries.append({
                "date": row[0],
                "name": row[1],
                "amount": Decimal(row[2]),
                "category": row[3],
                "subcategory": row[4],
                "payment_method": row[5],
                "notes": row[6],
            })
        return entries

    def summary(self, categories: Mapping[str, Sequence[str]]) -> Dict[str, Any]:
        entries = self.entries()
        if not entries:
            return {
                "total_entries": 0,
                "total_amount": 0,
                "categories_count": len(categories),
                "average_amount": 0,
            }

        total = sum((e["amount"] for e in entries), Decimal("0"))
        breakdown: Dict[str, Dict[str, Any]] = {}
        for e in entries:
            bucket = breakdown.setdefault(e["category"], {"count": 0, "total": Decimal("0")})
            bucket["count"] += 1
            bucket["total"] += e["amount"]

        return {
            "total_entries": len(entries),
            "total_amount": _round(total),
            "categories_count": len(categories),
            "average_amount": _round(total / len(entries)),
            "category_breakdown": {
                name: {"count": b["count"], "total": _round(b["total"])}
                for name, b in breakdown.items()
            },
        }
