import numpy as np
import pytest

from conftest import blank_image, paint_square
from domain.point3d import Point3D
from utils.marker_locator import MarkerLocator, Region, find_regions, select_marker

WIDTH, HEIGHT = 640, 360  # default downscaled frame


def square_mask(width, height, squares):
    mask = np.zeros((height, width), dtype=np.uint8)
    for (x, y), half in squares:
        mask[y - half:y + half + 1, x - half:x + half + 1] = 255
    return mask


def test_find_regions_area_and_centroid():
    mask = square_mask(200, 200, [((75, 65), 15)])
    regions = find_regions(mask)
    assert len(regions) == 1
    assert regions[0].area == 31 * 31
    assert regions[0].centroid == (75, 65)


def test_find_regions_ignores_holes():
    mask = square_mask(200, 200, [((100, 100), 30)])
    mask[90:111, 90:111] = 0
    regions = find_regions(mask)
    assert len(regions) == 1
    assert regions[0].area == 61 * 61


def test_degenerate_contours_report_their_own_pixels():
    mask = np.zeros((50, 50), dtype=np.uint8)
    mask[10, 10] = 255
    mask[30, 5:25] = 255
    regions = sorted(find_regions(mask), key=lambda r: r.area)
    assert [r.area for r in regions] == [1, 20]
    assert regions[0].centroid == (10, 10)
    assert regions[1].centroid == (14, 30)


def test_select_largest_region():
    mask = square_mask(300, 300, [((50, 50), 12), ((200, 200), 20), ((60, 220), 15)])
    region = select_marker(find_regions(mask))
    assert region.centroid == (200, 200)
    assert region.area == 41 * 41


def test_equal_areas_keep_first_region():
    regions = [Region(900.0, (10, 10)), Region(900.0, (50, 50)), Region(500.0, (90, 90))]
    assert select_marker(regions).centroid == (10, 10)


def test_min_area_is_strict():
    assert select_marker([Region(400.0, (5, 5))]) is None
    assert select_marker([Region(401.0, (5, 5))]).centroid == (5, 5)


def test_small_regions_only_is_not_found():
    mask = square_mask(200, 200, [((50, 50), 5), ((150, 150), 8)])
    assert select_marker(find_regions(mask)) is None


def _noisy_mask(small_count):
    squares = [(((i % 10) * 20 + 10, (i // 10) * 20 + 10), 1) for i in range(small_count)]
    squares.append(((300, 300), 20))
    return square_mask(400, 400, squares)


def test_too_many_regions_is_not_found():
    regions = find_regions(_noisy_mask(50))
    assert len(regions) == 51
    assert select_marker(regions) is None


def test_max_region_count_is_accepted():
    regions = find_regions(_noisy_mask(49))
    assert len(regions) == 50
    assert select_marker(regions).centroid == (300, 300)


def test_search_translates_by_offset():
    locator = MarkerLocator(frame_size=(WIDTH, HEIGHT))
    mask = square_mask(144, 144, [((70, 60), 15)])
    region, count = locator.search(mask, offset=(100, 40))
    assert count == 1
    assert region.centroid == (170, 100)


@pytest.fixture
def locator():
    return MarkerLocator(frame_size=(WIDTH, HEIGHT))


def test_interior_rectangle(locator):
    assert locator.local_size == 72
    assert locator.interior == (72, 72, 496, 216)
    assert locator.in_interior((72, 72))
    assert not locator.in_interior((71, 100))
    assert not locator.in_interior((568, 100))
    assert locator.in_interior((567, 287))
    assert not locator.in_interior((300, 288))


def test_full_search_then_local_search(locator):
    image = paint_square(blank_image(WIDTH, HEIGHT), (320, 180), 20)

    first = locator.locate(image)
    assert first.found
    assert not first.searched_locally
    assert abs(first.pixel[0] - 320) <= 3 and abs(first.pixel[1] - 180) <= 3

    second = locator.locate(image)
    assert second.found
    assert second.searched_locally
    assert second.pixel == first.pixel
    assert second.mask.shape == (2 * locator.local_size, 2 * locator.local_size)


def test_local_search_follows_moving_marker(locator):
    locator.locate(paint_square(blank_image(WIDTH, HEIGHT), (320, 180), 20))
    moved = locator.locate(paint_square(blank_image(WIDTH, HEIGHT), (340, 170), 20))
    reference = MarkerLocator(frame_size=(WIDTH, HEIGHT)).locate(
        paint_square(blank_image(WIDTH, HEIGHT), (340, 170), 20)
    )
    assert moved.searched_locally
    assert moved.pixel == reference.pixel


def test_failed_local_search_falls_back_to_full_search(locator):
    image = paint_square(blank_image(WIDTH, HEIGHT), (320, 180), 20)
    assert locator.locate(image).found

    lost = locator.locate(blank_image(WIDTH, HEIGHT))
    assert not lost.found
    assert lost.searched_locally

    far = paint_square(blank_image(WIDTH, HEIGHT), (500, 250), 20)
    found = locator.locate(far)
    assert found.found
    assert not found.searched_locally


def test_marker_outside_interior_is_not_found(locator):
    image = paint_square(blank_image(WIDTH, HEIGHT), (40, 180), 20)
    result = locator.locate(image)
    assert not result.found
    assert result.outside_interior
    assert result.pixel is None
    assert not locator.state.marker_found

    # next tick still does a full search
    assert not locator.locate(image).searched_locally


def test_frame_size_mismatch(locator):
    with pytest.raises(ValueError):
        locator.locate(blank_image(320, 180))


def test_invalid_local_ratio():
    with pytest.raises(ValueError):
        MarkerLocator(local_ratio=0.5)


def test_back_project(locator):
    table = np.zeros((720, 1280, 3), dtype=np.float64)
    table[200, 200] = (0.1, 0.2, 1.0)
    assert locator.back_project((100, 100), table) == Point3D(0.1, 0.2, 1.0)


def test_back_project_without_depth(locator):
    table = np.zeros((720, 1280, 3), dtype=np.float32)
    assert locator.back_project((100, 100), table) is None
    table[200, 200] = (np.nan, np.nan, np.nan)
    assert locator.back_project((100, 100), table) is None
