import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import settings

logger = logging.getLogger("qmanage")


def read_json(filename: str, fallback: Dict[str, Any], directory: Optional[Path] = None) -> Dict[str, Any]:
    path = (directory or settings.sample_data_dir) / filename
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        logger.warning("Could not load %s, using fallback data: %s", path, exc)
        return fallback


def outlet_samples() -> List[Dict[str, Any]]:
    return read_json("restaurants.json", {"restaurants": []}).get("restaurants", [])


def menu_samples() -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
    """Outlet name -> category -> items."""
    return read_json("menu-items.json", {"menuItems": {}}).get("menuItems", {})


def best_selling_samples() -> List[Dict[str, Any]]:
    return read_json("best-selling.json", {"bestSelling": []}).get("bestSelling", [])


def featured_samples() -> List[Dict[str, Any]]:
    return read_json("featured-products.json", {"featuredProducts": []}).get("featuredProducts", [])


def category_samples() -> List[str]:
    categories = set()
    for outlet_menu in (menu_samples() or {}).values():
        categories.update((outlet_menu or {}).keys())
    return sorted(categories)
