"""
Marker Localization by Color Segmentation

Finds the colored marker in the downscaled color frame and keeps the
frame-to-frame tracking state.

Features:
- Outer-contour region extraction with pixel moments (area, centroid)
- Largest-region selection with noise rejection
- Local search around the previous position, full-frame fallback
- Interior rectangle check so the next local window never leaves the frame
- Back-projection of the marker pixel through the color->3D mapping table
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np
import cv2
import logging

from domain.point3d import Point3D
from utils.color_range_filter import ColorRangeFilter
from config import (
    COLOR_WIDTH, COLOR_HEIGHT, SMALL_RATIO, LOCAL_RATIO,
    MAX_NUM_OBJECTS, MIN_OBJECT_AREA,
)

logger = logging.getLogger(__name__)

Pixel = Tuple[int, int]


@dataclass(frozen=True)
class Region:
    """Connected foreground region of a mask"""
    area: float  # Number of pixels in the filled region
    centroid: Pixel  # (x, y), truncated to integer pixels


@dataclass
class TrackState:
    """Tracking state carried from one tick to the next"""
    last_known_pixel: Optional[Pixel] = None
    marker_found: bool = False

    def reset(self):
        self.last_known_pixel = None
        self.marker_found = False


@dataclass
class MarkerResult:
    """Outcome of one marker search"""
    found: bool
    pixel: Optional[Pixel] = None  # Global coordinates in the downscaled frame
    area: float = 0.0
    searched_locally: bool = False
    region_count: int = 0
    outside_interior: bool = False  # A region qualified but lay outside the interior
    mask: Optional[np.ndarray] = None  # Thresholded image of the searched area

    @classmethod
    def not_found(cls, **kwargs) -> "MarkerResult":
        return cls(found=False, **kwargs)


def find_regions(mask: np.ndarray) -> List[Region]:
    """
    Enumerate the outermost foreground regions of a binary mask.

    Holes are ignored: each region is measured over its filled outer contour.
    Regions are returned in contour order.

    Args:
        mask: uint8 binary mask (non-zero = foreground)

    Returns:
        List of regions with pixel area and integer centroid
    """
    contours = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)[-2]
    regions = (_measure_contour(contour) for contour in contours)
    return [region for region in regions if region is not None]


def _measure_contour(contour: np.ndarray) -> Optional[Region]:
    """Pixel moments of the filled contour; None if it covers no pixel."""
    x, y, w, h = cv2.boundingRect(contour)
    filled = np.zeros((h, w), dtype=np.uint8)
    cv2.drawContours(filled, [contour], -1, 255, thickness=cv2.FILLED, offset=(-x, -y))
    moment = cv2.moments(filled, binaryImage=True)
    area = moment["m00"]
    if area == 0:
        return None
    return Region(
        area=area,
        centroid=(int(moment["m10"] / area) + x, int(moment["m01"] / area) + y),
    )


def select_marker(regions: List[Region],
                  max_num_objects: int = MAX_NUM_OBJECTS,
                  min_object_area: float = MIN_OBJECT_AREA) -> Optional[Region]:
    """
    Pick the marker among candidate regions.

    More than max_num_objects regions means a noisy filter and nothing is
    reported. Otherwise the largest region with area > min_object_area wins;
    on equal areas the first one is kept.
    """
    if len(regions) > max_num_objects:
        logger.debug(f"Noisy mask: {len(regions)} regions > {max_num_objects}")
        return None

    best: Optional[Region] = None
    ref_area = 0.0
    for region in regions:
        if region.area > min_object_area and region.area > ref_area:
            best = region
            ref_area = region.area
    return best


class MarkerLocator:
    """
    Locate the marker in consecutive downscaled frames.

    While the marker is tracked, only a square window of side 2 * local_size
    centred on the previous position is searched. When that fails, the next
    tick searches the whole frame again.

    Usage:
        locator = MarkerLocator()
        result = locator.locate(small_bgr_image)
        if result.found:
            position = locator.back_project(result.pixel, sensor_frame.color_to_camera)
    """

    def __init__(self,
                 color_filter: Optional[ColorRangeFilter] = None,
                 frame_size: Tuple[int, int] = (int(COLOR_WIDTH * SMALL_RATIO),
                                                int(COLOR_HEIGHT * SMALL_RATIO)),
                 small_ratio: float = SMALL_RATIO,
                 local_ratio: float = LOCAL_RATIO,
                 max_num_objects: int = MAX_NUM_OBJECTS,
                 min_object_area: float = MIN_OBJECT_AREA):
        """
        Initialize marker locator.

        Args:
            color_filter: Filter producing the binary mask
            frame_size: (width, height) of the downscaled frame
            small_ratio: Downscale factor from the full color frame
            local_ratio: Local window half-size as a fraction of the frame height
            max_num_objects: Region count above which the mask is considered noise
            min_object_area: Minimum region area in pixels
        """
        if not 0 < local_ratio < 0.5:
            raise ValueError(f"local_ratio must be in (0, 0.5), got {local_ratio}")

        self.color_filter = color_filter or ColorRangeFilter()
        self.width, self.height = frame_size
        self.small_ratio = small_ratio
        self.local_size = int(self.height * local_ratio)
        self.max_num_objects = max_num_objects
        self.min_object_area = min_object_area

        # Interior rectangle (x, y, w, h)
        self.interior = (
            self.local_size,
            self.local_size,
            self.width - 2 * self.local_size,
            self.height - 2 * self.local_size,
        )

        self.state = TrackState()

        logger.info(f"Initialized MarkerLocator for {self.width}x{self.height} frames")
        logger.info(f"Local search size: {self.local_size}px, interior: {self.interior}")

    def in_interior(self, pixel: Pixel) -> bool:
        """Left/top edges inclusive, right/bottom edges exclusive."""
        x, y = pixel
        ix, iy, iw, ih = self.interior
        return ix <= x < ix + iw and iy <= y < iy + ih

    def search(self, mask: np.ndarray, offset: Pixel = (0, 0)) -> Tuple[Optional[Region], int]:
        """
        Select the marker region in a mask and translate it to global coordinates.

        Args:
            mask: Binary mask of the searched area
            offset: Top-left corner of the searched area in the frame

        Returns:
            (region in global coordinates or None, number of regions found)
        """
        regions = find_regions(mask)
        region = select_marker(regions, self.max_num_objects, self.min_object_area)
        if region is None:
            return None, len(regions)
        cx, cy = region.centroid
        return Region(region.area, (cx + offset[0], cy + offset[1])), len(regions)

    def locate(self, small_image: np.ndarray) -> MarkerResult:
        """
        Run one tick of marker search and update the tracking state.

        Args:
            small_image: Downscaled BGR color frame

        Returns:
            MarkerResult; found is False when nothing qualified or when the
            marker lies outside the interior rectangle
        """
        h, w = small_image.shape[:2]
        if (w, h) != (self.width, self.height):
            raise ValueError(f"Expected {self.width}x{self.height} frame, got {w}x{h}")

        searched_locally = self.state.marker_found and self.state.last_known_pixel is not None
        if searched_locally:
            prev_x, prev_y = self.state.last_known_pixel
            ox, oy = prev_x - self.local_size, prev_y - self.local_size
            size = 2 * self.local_size
            window = small_image[oy:oy + size, ox:ox + size]
            mask = self.color_filter.apply(window)
            region, region_count = self.search(mask, offset=(ox, oy))
        else:
            mask = self.color_filter.apply(small_image)
            region, region_count = self.search(mask)

        if region is None:
            if self.state.marker_found:
                logger.debug("Marker lost, falling back to full search")
            self.state.marker_found = False
            return MarkerResult.not_found(
                searched_locally=searched_locally, region_count=region_count, mask=mask
            )

        if not self.in_interior(region.centroid):
            logger.debug(f"Marker at {region.centroid} outside interior {self.interior}")
            self.state.marker_found = False
            return MarkerResult.not_found(
                area=region.area,
                searched_locally=searched_locally,
                region_count=region_count,
                outside_interior=True,
                mask=mask,
            )

        self.state.marker_found = True
        self.state.last_known_pixel = region.centroid
        return MarkerResult(
            found=True,
            pixel=region.centroid,
            area=region.area,
            searched_locally=searched_locally,
            region_count=region_count,
            mask=mask,
        )

    def back_project(self, pixel: Pixel, color_to_camera: np.ndarray) -> Optional[Point3D]:
        """
        Look up the camera-space position of a downscaled-frame pixel.

        Args:
            pixel: (x, y) in the downscaled frame
            color_to_camera: Full-resolution color->3D mapping table (H x W x 3)

        Returns:
            Point3D, or None if the pixel has no valid depth
        """
        x, y = pixel
        row = int(y / self.small_ratio)
        col = int(x / self.small_ratio)
        rows, cols = color_to_camera.shape[:2]
        if not (0 <= row < rows and 0 <= col < cols):
            return None
        px, py, pz = color_to_camera[row, col]
        point = Point3D(float(px), float(py), float(pz))
        return point if point.is_valid else None

    def reset(self):
        self.state.reset()
