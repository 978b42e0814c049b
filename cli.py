#!/usr/bin/env python
"""
Command-line interface for the map viewer backend

Usage:
    python cli.py --osm berkeley.osm info
    python cli.py --osm berkeley.osm closest --lon -122.26 --lat 37.87
    python cli.py raster --ullon -122.30 --ullat 37.89 --lrlon -122.21 --lrlat 37.82 --width 1024
    python cli.py --osm berkeley.osm search --prefix Berk
"""

import sys
import json
import argparse

from loguru import logger
from mapgraph import BoundingBox, MapDatabase, PointNotFoundError, EmptyGraphError, Rasterer


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def emit(payload):
    print(json.dumps(payload, indent=2))


def load_database(args) -> MapDatabase:
    return MapDatabase.load(path=args.osm, cache_dir=args.cache_dir)


def cmd_info(args):
    """Print a summary of the built map"""
    setup_logging(args.verbose)
    db = load_database(args)
    emit(db.summary().model_dump())
    return 0


def cmd_closest(args):
    """Find the road vertex nearest to a location"""
    setup_logging(args.verbose)
    db = load_database(args)
    try:
        node = db.closest(args.lon, args.lat)
    except (EmptyGraphError, ValueError) as e:
        logger.error(str(e))
        return 1
    emit({"id": node, "lon": db.lon(node), "lat": db.lat(node)})
    return 0


def cmd_distance(args):
    """Great-circle distance and bearing between two vertices"""
    setup_logging(args.verbose)
    db = load_database(args)
    try:
        emit({
            "from": args.from_id,
            "to": args.to_id,
            "distance_miles": db.distance(args.from_id, args.to_id),
            "bearing_deg": db.bearing(args.from_id, args.to_id),
        })
    except PointNotFoundError as e:
        logger.error(str(e))
        return 1
    return 0


def cmd_raster(args):
    """Select the tile grid for a viewport (no graph needed)"""
    setup_logging(args.verbose)
    box = BoundingBox(ullon=args.ullon, ullat=args.ullat, lrlon=args.lrlon, lrlat=args.lrlat)
    result = Rasterer().get_map_raster(box, args.width)
    emit(result.model_dump())
    return 0 if result.query_success else 1


def cmd_search(args):
    """Look up locations by exact name or by prefix"""
    setup_logging(args.verbose)
    db = load_database(args)
    if args.prefix is not None:
        emit(db.locations_by_prefix(args.prefix))
    else:
        emit([record.model_dump() for record in db.locations(args.name)])
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Map viewer backend CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Summarise a map extract:
    python cli.py --osm berkeley.osm info

  Snap a click to the road graph:
    python cli.py --osm berkeley.osm closest --lon -122.26 --lat 37.87

  Autocomplete a location name:
    python cli.py --osm berkeley.osm search --prefix Berk
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--osm", help="OSM XML or Overpass JSON file (default: MAPGRAPH_OSM_PATH or Overpass)")
    parser.add_argument("--cache-dir", help="Directory for cached Overpass responses")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    info_parser = subparsers.add_parser("info", help="Summarise the built map")
    info_parser.set_defaults(func=cmd_info)

    closest_parser = subparsers.add_parser("closest", help="Nearest road vertex to a location")
    closest_parser.add_argument("--lon", type=float, required=True, help="Longitude")
    closest_parser.add_argument("--lat", type=float, required=True, help="Latitude")
    closest_parser.set_defaults(func=cmd_closest)

    distance_parser = subparsers.add_parser("distance", help="Distance and bearing between two vertices")
    distance_parser.add_argument("--from", dest="from_id", type=int, required=True, help="Start vertex id")
    distance_parser.add_argument("--to", dest="to_id", type=int, required=True, help="End vertex id")
    distance_parser.set_defaults(func=cmd_distance)

    raster_parser = subparsers.add_parser("raster", help="Tile grid for a viewport")
    raster_parser.add_argument("--ullon", type=float, required=True, help="Upper-left longitude")
    raster_parser.add_argument("--ullat", type=float, required=True, help="Upper-left latitude")
    raster_parser.add_argument("--lrlon", type=float, required=True, help="Lower-right longitude")
    raster_parser.add_argument("--lrlat", type=float, required=True, help="Lower-right latitude")
    raster_parser.add_argument("--width", "-w", type=float, required=True, help="Viewport width in pixels")
    raster_parser.set_defaults(func=cmd_raster)

    search_parser = subparsers.add_parser("search", help="Location lookup")
    group = search_parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--name", help="Exact location name")
    group.add_argument("--prefix", help="Name prefix (autocomplete)")
    search_parser.set_defaults(func=cmd_search)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
