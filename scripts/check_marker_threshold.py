"""
Marker Threshold Check

Runs the marker color filter and locator on a still image (for example a
screenshot of the preview) so MARKER_HSV_RANGE in config.py can be tuned
without the sensor connected.

Usage:
    python scripts/check_marker_threshold.py --image snaps/foto.jpg
    python scripts/check_marker_threshold.py --image snaps/foto.jpg \
        --hsv 76,102,112,256,171,256 --mask-out mask.png
"""

import argparse
import logging
import sys
from pathlib import Path

import cv2

sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.color_range import ColorRange
from utils.color_range_filter import ColorRangeFilter
from utils.marker_locator import find_regions, select_marker
from config import MARKER_HSV_RANGE, MAX_NUM_OBJECTS, MIN_OBJECT_AREA


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Check the marker HSV range on a still image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--image', type=str, required=True,
                        help='Path to a BGR image (already downscaled like the preview)')
    parser.add_argument('--hsv', type=str,
                        help='Comma-separated H_MIN,H_MAX,S_MIN,S_MAX,V_MIN,V_MAX (default: config)')
    parser.add_argument('--mask-out', type=str,
                        help='Where to save the thresholded mask')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    image_path = Path(args.image)
    image = cv2.imread(str(image_path))
    if image is None:
        print(f"Error: could not read image: {image_path}")
        return 1

    bounds = tuple(int(v) for v in args.hsv.split(',')) if args.hsv else MARKER_HSV_RANGE
    if len(bounds) != 6:
        print("Error: --hsv needs six values")
        return 1

    mask = ColorRangeFilter(ColorRange.from_tuple(bounds)).apply(image)
    regions = find_regions(mask)
    marker = select_marker(regions)

    print(f"HSV range:  {bounds}")
    print(f"Regions:    {len(regions)} (max {MAX_NUM_OBJECTS})")
    for i, region in enumerate(sorted(regions, key=lambda r: r.area, reverse=True)[:5]):
        print(f"  #{i}: area={region.area:.0f} centroid={region.centroid}")
    if marker is None:
        print(f"Marker:     not found (min area {MIN_OBJECT_AREA})")
    else:
        print(f"Marker:     {marker.centroid} area={marker.area:.0f}")

    if args.mask_out:
        cv2.imwrite(args.mask_out, mask)
        print(f"Mask saved: {args.mask_out}")

    return 0 if marker is not None else 2


if __name__ == "__main__":
    sys.exit(main())
