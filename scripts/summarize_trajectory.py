"""
Trajectory File Summary

Prints frame count, duration and marker/body presence of one recorded
trajectory file.

Usage:
    python scripts/summarize_trajectory.py --file data/kindata.txt
    python scripts/summarize_trajectory.py --file data/kindata.txt --joints 3
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.trajectory_writer import read_trajectory
from config import RECORDED_JOINTS


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(description="Summarize a trajectory file")
    parser.add_argument('--file', type=str, required=True, help='Trajectory text file')
    parser.add_argument('--joints', type=int, default=len(RECORDED_JOINTS),
                        help=f'Number of joint columns (default: {len(RECORDED_JOINTS)})')
    args = parser.parse_args()

    path = Path(args.file)
    if not path.exists():
        print(f"Error: file not found: {path}")
        return 1

    try:
        records = read_trajectory(path, args.joints)
    except ValueError as e:
        print(f"Error: {path} is not a trajectory file with {args.joints} joints: {e}")
        return 1

    if not records:
        print(f"{path}: empty")
        return 0

    n = len(records)
    with_marker = sum(1 for r in records if r.marker_present)
    with_body = sum(1 for r in records if r.body_present)
    first, last = records[0].timestamp_seconds, records[-1].timestamp_seconds

    print(f"File:     {path}")
    print(f"Frames:   {n}")
    print(f"Time:     {first:.3f} -> {last:.3f}" + ("  (wrapped)" if last < first else ""))
    print(f"Marker:   {with_marker}/{n} ({100.0 * with_marker / n:.1f}%)")
    print(f"Body:     {with_body}/{n} ({100.0 * with_body / n:.1f}%)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
