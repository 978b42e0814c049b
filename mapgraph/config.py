"""
Configuration settings for the map viewer backend
"""

from dataclasses import dataclass, field
from typing import List, Optional
import os

from dotenv import load_dotenv


@dataclass
class RasterConfig:
    """Root tile set geometry"""
    # Bounding box covered by the depth-0 tile (degrees)
    root_ullon: float = -122.2998046875
    root_ullat: float = 37.892195547244356
    root_lrlon: float = -122.2119140625
    root_lrlat: float = 37.82280243352756

    # Pixel width/height of every tile image
    tile_size: int = 256

    # Deepest tile level available on disk
    max_depth: int = 7

    @property
    def lon_span(self) -> float:
        return self.root_lrlon - self.root_ullon

    @property
    def lat_span(self) -> float:
        return self.root_ullat - self.root_lrlat


@dataclass
class APIConfig:
    """API endpoints and configuration"""
    # Overpass API (OSM)
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_timeout: int = 90

    # Request settings
    max_retries: int = 3
    retry_delay: float = 5.0
    min_request_interval: float = 2.0

    # User agent for API requests
    user_agent: str = "MapGraph/1.0"


@dataclass
class MapConfig:
    """Map database configuration"""
    # OSM extract (.osm XML or Overpass .json) used to build the graph
    osm_path: Optional[str] = None

    # Directory for cached Overpass responses
    cache_dir: Optional[str] = None

    # Only ways tagged with one of these highway types become edges
    allowed_highway_types: List[str] = field(default_factory=lambda: [
        "motorway",
        "trunk",
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
        "living_street",
        "motorway_link",
        "trunk_link",
        "primary_link",
        "secondary_link",
        "tertiary_link",
    ])

    raster: RasterConfig = field(default_factory=RasterConfig)
    api: APIConfig = field(default_factory=APIConfig)


def load_config() -> MapConfig:
    """Build a config, applying overrides from the environment / .env file"""
    load_dotenv(override=False)
    return MapConfig(
        osm_path=os.getenv("MAPGRAPH_OSM_PATH") or None,
        cache_dir=os.getenv("MAPGRAPH_CACHE_DIR") or None,
    )


# Global config instance
config = load_config()


def get_config() -> MapConfig:
    """Get global configuration"""
    return config


def validate_config(config: MapConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    raster = config.raster
    if raster is None:
        errors.append("raster configuration is required but not set")
    else:
        if raster.root_ullon >= raster.root_lrlon:
            errors.append(
                f"raster.root_ullon ({raster.root_ullon}) must be west of "
                f"raster.root_lrlon ({raster.root_lrlon})"
            )
        if raster.root_ullat <= raster.root_lrlat:
            errors.append(
                f"raster.root_ullat ({raster.root_ullat}) must be north of "
                f"raster.root_lrlat ({raster.root_lrlat})"
            )
        if raster.tile_size <= 0:
            errors.append(f"raster.tile_size must be positive, got {raster.tile_size}")
        if raster.max_depth < 0 or raster.max_depth > 7:
            errors.append(f"raster.max_depth must be between 0 and 7, got {raster.max_depth}")

    if config.api is None:
        errors.append("api configuration is required but not set")
    elif not config.api.overpass_url:
        errors.append("api.overpass_url is required but not set")

    if not config.allowed_highway_types:
        errors.append("allowed_highway_types must not be empty")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
