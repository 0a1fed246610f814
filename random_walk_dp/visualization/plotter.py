import logging
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np

from random_walk_dp.data_structures.walk import Walk

logger = logging.getLogger(__name__)


def _finish(fig, path, title):
    if title:
        plt.title(title)
    if path is not None:
        fig.savefig(path)
        plt.close(fig)
        logger.info(f"Saved plot to {path}")
    else:
        plt.show()


def plot_walk(walk: Walk, title: str = "Walk", path=None):
    walk_points = walk.to_numpy()
    fig = plt.figure(figsize=(8, 8))
    if len(walk_points) == 0:
        logger.warning("No path to plot")
    else:
        plt.plot(walk_points[:, 0], walk_points[:, 1], 'r-')
        plt.scatter([walk_points[0, 0]], [walk_points[0, 1]], color='green', label='Start')
        plt.scatter([walk_points[-1, 0]], [walk_points[-1, 1]], color='blue', label='End')
        plt.legend()
    plt.gca().invert_yaxis()  # y grows southwards
    plt.gca().set_aspect('equal')
    _finish(fig, path, title)
    return fig


def plot_walks(walks: Iterable[Walk], title: str = "Walks", path=None):
    fig = plt.figure(figsize=(8, 8))
    for walk in walks:
        walk_points = walk.to_numpy()
        if len(walk_points) == 0:
            continue
        plt.plot(walk_points[:, 0], walk_points[:, 1], '-', alpha=0.7)
        plt.scatter([walk_points[0, 0]], [walk_points[0, 1]], color='green', s=10)
        plt.scatter([walk_points[-1, 0]], [walk_points[-1, 1]], color='blue', s=10)
    plt.gca().invert_yaxis()
    plt.gca().set_aspect('equal')
    _finish(fig, path, title)
    return fig


def plot_heatmap(dp, t: int, variant: Optional[int] = None, title: Optional[str] = None, path=None):
    """Occupancy probabilities of one time step, barriers hatched in grey."""
    if variant is None:
        layer = np.array([[dp.at(x, y, t) for x in range(-dp.time_limit, dp.time_limit + 1)]
                          for y in range(-dp.time_limit, dp.time_limit + 1)])
    else:
        layer = np.array([[dp.at(x, y, t, variant) for x in range(-dp.time_limit, dp.time_limit + 1)]
                          for y in range(-dp.time_limit, dp.time_limit + 1)])

    T = dp.time_limit
    fig = plt.figure(figsize=(8, 8))
    plt.imshow(layer, cmap='viridis', extent=(-T - 0.5, T + 0.5, T + 0.5, -T - 0.5))
    plt.colorbar(label='Probability')

    barriers = dp.field_probabilities().T == 0.0
    if barriers.any():
        plt.imshow(np.ma.masked_where(~barriers, barriers.astype(np.float64)), cmap='Greys', vmin=0, vmax=1, alpha=0.6,
                   extent=(-T - 0.5, T + 0.5, T + 0.5, -T - 0.5))

    _finish(fig, path, title or f"t = {t}")
    return fig
