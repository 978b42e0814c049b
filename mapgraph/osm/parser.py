"""
OSM data parser

Parses Overpass JSON responses and OSM XML extracts into Point and Way objects
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from ..graph.models import Point, Way


class OSMResponseParser:
    """Parses OSM data into graph points and ways"""

    @staticmethod
    def parse_elements(data: Dict[str, Any]) -> Tuple[Dict[int, Point], List[Way]]:
        """
        Parse an Overpass JSON response into points and ways

        Expects 'out body' output (ways carry node id references).

        Args:
            data: JSON response from Overpass API

        Returns:
            Tuple of (points dict, ways list)
        """
        points = {}
        ways = []
        skipped = {"nodes": 0, "ways": 0, "refs": 0}

        for element in data.get("elements", []):
            kind = element.get("type")
            if kind == "node":
                point = OSMResponseParser._make_point(
                    element.get("id"), element.get("lat"), element.get("lon"), element.get("tags")
                )
                if point is None:
                    skipped["nodes"] += 1
                    continue
                points[point.id] = point
            elif kind == "way":
                way = OSMResponseParser._make_way(
                    element.get("id"), element.get("tags"), element.get("nodes") or [], skipped
                )
                if way is not None:
                    ways.append(way)

        OSMResponseParser._log_skipped(skipped, "Overpass response")
        return points, ways

    @staticmethod
    def parse_xml(path: str) -> Tuple[Dict[int, Point], List[Way]]:
        """
        Parse an OSM XML extract (.osm) into points and ways

        The file is streamed; each element is released once handled.
        """
        points = {}
        ways = []
        skipped = {"nodes": 0, "ways": 0, "refs": 0}

        for _, elem in ET.iterparse(path, events=("end",)):
            if elem.tag == "node":
                point = OSMResponseParser._make_point(
                    elem.get("id"), elem.get("lat"), elem.get("lon"), OSMResponseParser._xml_tags(elem)
                )
                if point is None:
                    skipped["nodes"] += 1
                else:
                    points[point.id] = point
                elem.clear()
            elif elem.tag == "way":
                way = OSMResponseParser._make_way(
                    elem.get("id"),
                    OSMResponseParser._xml_tags(elem),
                    [nd.get("ref") for nd in elem.findall("nd")],
                    skipped,
                )
                if way is not None:
                    ways.append(way)
                elem.clear()

        OSMResponseParser._log_skipped(skipped, path)
        return points, ways

    @staticmethod
    def _xml_tags(elem) -> Dict[str, str]:
        return {t.get("k"): t.get("v", "") for t in elem.findall("tag") if t.get("k")}

    @staticmethod
    def _make_point(node_id, lat, lon, tags) -> Optional[Point]:
        try:
            return Point(id=int(node_id), lat=float(lat), lon=float(lon), tags=dict(tags or {}))
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _make_way(way_id, tags, refs, skipped: Dict[str, int]) -> Optional[Way]:
        """Build a Way, dropping node references that are not integer ids"""
        try:
            way_id = int(way_id)
        except (TypeError, ValueError):
            skipped["ways"] += 1
            return None

        node_ids = []
        for ref in refs:
            try:
                node_ids.append(int(ref))
            except (TypeError, ValueError):
                skipped["refs"] += 1
        return Way(id=way_id, tags=dict(tags or {}), node_ids=node_ids)

    @staticmethod
    def _log_skipped(skipped: Dict[str, int], source: str) -> None:
        if any(skipped.values()):
            logger.warning(
                f"Skipped {skipped['nodes']} nodes without usable coordinates, "
                f"{skipped['ways']} ways without an id and {skipped['refs']} bad node references in {source}"
            )
