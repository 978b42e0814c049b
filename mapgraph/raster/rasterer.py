"""
Tile rasterer

Takes a query box and a viewport width and finds the grid of pre-rendered
tiles that best matches it. The front end stitches the grid into one image.

Tiles form a quadtree over the root box: depth d splits the root into
2^d x 2^d tiles named d{depth}_x{col}_y{row}.png, row 0 being northernmost.
"""

import math
from typing import List, Optional

from loguru import logger

from ..config import RasterConfig, get_config
from ..models import BoundingBox, RasterResult


class Rasterer:
    """
    Selects tile images for a requested viewport

    The chosen depth is the shallowest one whose longitudinal distance per
    pixel (LonDPP) is at most the query's LonDPP. All tiles at that depth
    touching the query box are returned, in display order.
    """

    def __init__(self, config: Optional[RasterConfig] = None):
        self.config = config or get_config().raster

    def get_map_raster(self, box: BoundingBox, width: float) -> RasterResult:
        """
        Compute the tile grid for a query box

        Args:
            box: Requested bounding box (degrees)
            width: Viewport width in pixels

        Returns:
            RasterResult. When query_success is False the grid is empty and
            the raster bounds echo the request.
        """
        if not self._is_valid(box, width):
            logger.debug(f"Rejected raster query {box} (width={width})")
            return RasterResult(
                raster_ul_lon=box.ullon,
                raster_ul_lat=box.ullat,
                raster_lr_lon=box.lrlon,
                raster_lr_lat=box.lrlat,
            )

        depth = self._depth(self.lon_dpp(box.lrlon, box.ullon, width))
        cfg = self.config
        tiles_per_side = 2 ** depth
        last = tiles_per_side - 1
        tile_width = cfg.lon_span / tiles_per_side
        tile_height = cfg.lat_span / tiles_per_side

        # Whole tiles to drop from each side of the root box
        start_x = self._clamp(math.floor((box.ullon - cfg.root_ullon) / tile_width), last)
        end_x = last - self._clamp(math.floor((cfg.root_lrlon - box.lrlon) / tile_width), last)
        start_y = self._clamp(math.floor((cfg.root_ullat - box.ullat) / tile_height), last)
        end_y = last - self._clamp(math.floor((box.lrlat - cfg.root_lrlat) / tile_height), last)
        end_x = max(end_x, start_x)
        end_y = max(end_y, start_y)

        result = RasterResult(
            render_grid=self._render_grid(depth, start_x, end_x, start_y, end_y),
            raster_ul_lon=cfg.root_ullon + start_x * tile_width,
            raster_ul_lat=cfg.root_ullat - start_y * tile_height,
            raster_lr_lon=cfg.root_lrlon - (last - end_x) * tile_width,
            raster_lr_lat=cfg.root_lrlat + (last - end_y) * tile_height,
            depth=depth,
            query_success=True,
            start_x=start_x,
            end_x=end_x,
            start_y=start_y,
            end_y=end_y,
        )
        logger.debug(
            f"Raster depth {depth}: x {start_x}-{end_x}, y {start_y}-{end_y} "
            f"({len(result.render_grid)}x{len(result.render_grid[0])} tiles)"
        )
        return result

    @staticmethod
    def lon_dpp(lrlon: float, ullon: float, width: float) -> float:
        return (lrlon - ullon) / width

    def _is_valid(self, box: BoundingBox, width: float) -> bool:
        cfg = self.config
        if not all(math.isfinite(v) for v in (box.ullon, box.ullat, box.lrlon, box.lrlat, width)):
            return False
        if width <= 0:
            return False
        if box.ullon > box.lrlon or box.ullat < box.lrlat:
            return False
        # No overlap with the root box at all
        if (box.ullat < cfg.root_lrlat or box.lrlat > cfg.root_ullat
                or box.ullon > cfg.root_lrlon or box.lrlon < cfg.root_ullon):
            return False
        return True

    def _depth(self, query_lon_dpp: float) -> int:
        depth = 0
        img_lon_dpp = self.lon_dpp(self.config.root_lrlon, self.config.root_ullon, self.config.tile_size)
        while img_lon_dpp > query_lon_dpp and depth < self.config.max_depth:
            depth += 1
            img_lon_dpp /= 2
        return depth

    @staticmethod
    def _clamp(offset: int, last: int) -> int:
        return min(max(offset, 0), last)

    @staticmethod
    def _render_grid(depth: int, start_x: int, end_x: int, start_y: int, end_y: int) -> List[List[str]]:
        return [
            [f"d{depth}_x{x}_y{y}.png" for x in range(start_x, end_x + 1)]
            for y in range(start_y, end_y + 1)
        ]
