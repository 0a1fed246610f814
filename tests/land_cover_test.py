import numpy as np
import pytest

from random_walk_dp.data_sources.land_cover_adapter import (
    GRASSLAND,
    TREE_COVER,
    WATER,
    field_probabilities_from_land_cover,
    land_cover_window,
    landcover_classes,
    read_land_cover_txt,
)


@pytest.fixture
def land_cover_file(tmp_path):
    path = tmp_path / "land_cover.txt"
    path.write_text("10 20 30 40\n"
                    "50 60 70 80\n"
                    "90 95 100 10\n")
    return path


def test_read_land_cover_txt(land_cover_file):
    grid = read_land_cover_txt(land_cover_file)
    assert grid.shape == (3, 4)
    assert grid[1][3] == WATER
    assert set(np.unique(grid)) <= set(landcover_classes)


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_land_cover_txt(tmp_path / "missing.txt")


def test_window_indexed_x_y(land_cover_file):
    grid = read_land_cover_txt(land_cover_file)
    window = land_cover_window(grid, 1, 1, 1)
    assert window.shape == (3, 3)
    assert window[1][1] == 60
    # x + 1, y - 1
    assert window[2][0] == 30
    assert window[0][2] == 90


def test_window_outside_grid_is_filled(land_cover_file):
    grid = read_land_cover_txt(land_cover_file)
    window = land_cover_window(grid, 0, 0, 1)
    assert window[1][1] == TREE_COVER
    assert window[0][0] == WATER
    assert window[0][1] == WATER
    assert window[2][1] == 20

    window = land_cover_window(grid, 0, 0, 1, fill=GRASSLAND)
    assert window[0][0] == GRASSLAND


def test_window_center_out_of_bounds(land_cover_file):
    grid = read_land_cover_txt(land_cover_file)
    with pytest.raises(ValueError):
        land_cover_window(grid, 4, 0, 1)


def test_field_probabilities_from_land_cover():
    window = np.array([[TREE_COVER, WATER], [GRASSLAND, TREE_COVER]])
    probabilities = field_probabilities_from_land_cover(window, probabilities={GRASSLAND: 0.5})
    assert np.array_equal(probabilities, [[1.0, 0.0], [0.5, 1.0]])
