"""
Overpass response cache

Raw Overpass JSON is stored on disk under a name derived from the queried
bounding box, so rebuilding the same map does not hit the API again.
"""

import json
import hashlib
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from ..models import BoundingBox


class OSMCache:
    """Disk cache of Overpass responses keyed by bounding box"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = Path(cache_dir) if cache_dir else None

    @property
    def enabled(self) -> bool:
        return self.cache_dir is not None

    def path_for(self, box: BoundingBox) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        key = f"{box.ullon:.6f},{box.ullat:.6f},{box.lrlon:.6f},{box.lrlat:.6f}"
        digest = hashlib.md5(key.encode()).hexdigest()[:12]
        return self.cache_dir / f"overpass_{digest}.json"

    def load(self, box: BoundingBox) -> Optional[Dict[str, Any]]:
        """Cached response for box, or None on a miss or unreadable entry"""
        path = self.path_for(box)
        if path is None or not path.is_file():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None
        logger.info(f"Overpass cache hit for {box}: {path}")
        return data

    def save(self, box: BoundingBox, data: Dict[str, Any]) -> None:
        path = self.path_for(box)
        if path is None:
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write cache entry {path}: {e}")
            return
        logger.debug(f"Cached Overpass response for {box} at {path}")
