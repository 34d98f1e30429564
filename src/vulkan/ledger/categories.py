"""Category/subcategory registry stored as categories.json."""

import json
import threading
from pathlib import Path
from typing import Dict, List

from vulkan.exceptions import ValidationError

CATEGORIES_FILENAME = "categories.json"


class CategoryStore:
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / CATEGORIES_FILENAME
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, List[str]]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): list(v) if isinstance(v, list) else [] for k, v in raw.items()}

    def _save(self, categories: Dict[str, List[str]]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(categories, indent=2), encoding="utf-8")

    def categories(self) -> Dict[str, List[str]]:
        with self._lock:
            return self._load()

    def has_category(self, category: str) -> bool:
        return category in self.categories()

    def has_subcategory(self, category: str, subcategory: str) -> bool:
        return subcategory in self.categories().get(category, [])

    def add_category(self, category: str) -> Dict[str, object]:
        category = category.strip()
        if not category:
            raise ValidationError(code="EMPTY_CATEGORY", message="Category name cannot be empty")

        with self._lock:
            categories = self._load()
            if category in categories:
                raise ValidationError(
                    code="CATEGORY_EXISTS",
                    message=f'Category "{category}" already exists',
                )
            categories[category] = []
            self._save(categories)

        return {"category": category, "subcategories": []}

    def add_subcategory(self, category: str, subcategory: str) -> Dict[str, str]:
        category = category.strip()
        subcategory = subcategory.strip()
        if not category:
            raise ValidationError(code="EMPTY_CATEGORY", message="Category name cannot be empty")
        if not subcategory:
            raise ValidationError(code="EMPTY_SUBCATEGORY", message="Subcategory name cannot be empty")

        with self._lock:
            categories = self._load()
            if category not in categories:
                raise ValidationError(
                    code="UNKNOWN_CATEGORY",
                    message=f'Category "{category}" does not exist',
                )
            if subcategory in categories[category]:
                raise ValidationError(
                    code="SUBCATEGORY_EXISTS",
                    message=f'Subcategory "{subcategory}" already exists in category "{category}"',
                )
            categories[category].append(subcategory)
            self._save(categories)

        return {"category": category, "subcategory": subcategory}
