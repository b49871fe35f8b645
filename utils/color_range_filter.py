"""Color segmentation of the marker in HSV space."""
from typing import Optional
import numpy as np
import cv2
from domain.color_range import ColorRange
from config import MARKER_HSV_RANGE

# Structuring elements used by denoise()
ERODE_KERNEL_SIZE = (3, 3)
DILATE_KERNEL_SIZE = (8, 8)
MORPH_PASSES = 2


class ColorRangeFilter:
    """
    Threshold a BGR image against a fixed HSV color range.

    Usage:
        color_filter = ColorRangeFilter(ColorRange.from_tuple(MARKER_HSV_RANGE))
        mask = color_filter.apply(small_bgr_image)
    """

    def __init__(self, color_range: Optional[ColorRange] = None):
        self.color_range = color_range or ColorRange.from_tuple(MARKER_HSV_RANGE)
        self.erode_element = cv2.getStructuringElement(cv2.MORPH_RECT, ERODE_KERNEL_SIZE)
        self.dilate_element = cv2.getStructuringElement(cv2.MORPH_RECT, DILATE_KERNEL_SIZE)

    def threshold(self, bgr_image: np.ndarray) -> np.ndarray:
        """
        Binary mask of pixels whose H, S and V all fall inside the range.

        Args:
            bgr_image: 3-channel BGR image (uint8)

        Returns:
            uint8 mask, 255 where the pixel is inside the range, 0 elsewhere
        """
        hsv_image = cv2.cvtColor(bgr_image, cv2.COLOR_BGR2HSV)
        return cv2.inRange(hsv_image, self.color_range.lower, self.color_range.upper)

    def denoise(self, mask: np.ndarray) -> np.ndarray:
        """Erode twice with the small element, then dilate twice with the large one."""
        cleaned = mask
        for _ in range(MORPH_PASSES):
            cleaned = cv2.erode(cleaned, self.erode_element)
        for _ in range(MORPH_PASSES):
            cleaned = cv2.dilate(cleaned, self.dilate_element)
        return cleaned

    def apply(self, bgr_image: np.ndarray) -> np.ndarray:
        """Threshold and denoise. Output has the same height and width as the input."""
        return self.denoise(self.threshold(bgr_image))
