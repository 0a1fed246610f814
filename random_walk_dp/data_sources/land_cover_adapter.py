import logging
import os
from typing import Dict, Iterable, Optional

import numpy as np

logger = logging.getLogger(__name__)

TREE_COVER = 10
SHRUBLAND = 20
GRASSLAND = 30
CROPLAND = 40
BUILT_UP = 50
SPARSE_VEGETATION = 60
SNOW_AND_ICE = 70
WATER = 80
HERBACEOUS_WETLAND = 90
MANGROVES = 95
MOSS_AND_LICHEN = 100

landcover_classes = {
    TREE_COVER: "Tree cover",
    SHRUBLAND: "Shrubland",
    GRASSLAND: "Grassland",
    CROPLAND: "Cropland",
    BUILT_UP: "Built-up",
    SPARSE_VEGETATION: "Bare / sparse vegetation",
    SNOW_AND_ICE: "Snow and ice",
    WATER: "Permanent water bodies",
    HERBACEOUS_WETLAND: "Herbaceous wetland",
    MANGROVES: "Mangroves",
    MOSS_AND_LICHEN: "Moss and lichen"
}


def read_land_cover_txt(file_path, delim: Optional[str] = None) -> np.ndarray:
    """Read a discrete land cover grid, one text row per y coordinate.

    Args:
        file_path: Text file of integer land cover classes
        delim: Column delimiter, any whitespace if None

    Returns:
        integer array indexed [y][x]
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Land cover file {file_path} does not exist")
    grid = np.loadtxt(file_path, delimiter=delim, dtype=np.int64, ndmin=2)
    logger.info(f"Read land cover grid {grid.shape[1]}x{grid.shape[0]} from {file_path}")
    return grid


def land_cover_window(land_cover: np.ndarray, center_x: int, center_y: int, time_limit: int,
                      fill: int = WATER) -> np.ndarray:
    """Cut the ``(2T+1)x(2T+1)`` window around a start point out of a ``[y][x]`` land cover grid.

    The result is indexed ``[x][y]`` with the start point at ``[T][T]``, as used by dynamic
    programs and the land cover walker. Cells outside the grid are set to ``fill``.
    """
    land_cover = np.asarray(land_cover)
    height, width = land_cover.shape
    if not (0 <= center_x < width and 0 <= center_y < height):
        raise ValueError(f"Start position ({center_x}, {center_y}) out of bounds for grid {width}x{height}")

    n = 2 * time_limit + 1
    window = np.full((n, n), fill, dtype=np.int64)

    x0, y0 = center_x - time_limit, center_y - time_limit
    sx0, sx1 = max(x0, 0), min(x0 + n, width)
    sy0, sy1 = max(y0, 0), min(y0 + n, height)
    window[sx0 - x0:sx1 - x0, sy0 - y0:sy1 - y0] = land_cover[sy0:sy1, sx0:sx1].T

    if (sx1 - sx0, sy1 - sy0) != (n, n):
        logger.warning(f"Window around ({center_x}, {center_y}) with time limit {time_limit} exceeds the "
                       f"{width}x{height} grid, filled with class {fill}")
    return window


def field_probabilities_from_land_cover(window: np.ndarray, forbidden: Iterable[int] = (WATER,),
                                        probabilities: Optional[Dict[int, float]] = None) -> np.ndarray:
    """Field probabilities for a land cover window: 0 for forbidden classes, else the class
    probability (1.0 for classes not listed)."""
    window = np.asarray(window)
    result = np.ones(window.shape, dtype=np.float64)
    for land_cover, probability in (probabilities or {}).items():
        result[window == land_cover] = probability
    for land_cover in forbidden:
        result[window == land_cover] = 0.0
    return result
