import numpy as np
import pytest

from domain.frame_record import FrameRecord
from domain.point3d import Point3D
from utils.trajectory_writer import (
    TrajectoryWriter, column_count, format_record, format_timestamp,
    load_trajectory_array, parse_line, read_trajectory,
)

JOINTS = (
    Point3D(0.1, 0.3, 1.5),
    Point3D(0.2, 0.1, 1.4),
    Point3D(0.3, -0.1, 1.3),
    Point3D(0.0, 0.35, 1.55),
)


def full_record(ts=1234):
    return FrameRecord(ts, True, Point3D(0.1, 0.2, 1.0), True, JOINTS)


def absent_record(ts=5):
    return FrameRecord(ts, False, Point3D.zero(), False, (Point3D.zero(),) * 4)


@pytest.mark.parametrize("ms,text", [
    (0, "0.000"),
    (5, "0.005"),
    (1234, "1.234"),
    (3599999, "3599.999"),
])
def test_format_timestamp(ms, text):
    assert format_timestamp(ms) == text


def test_every_field_followed_by_tab():
    line = format_record(full_record())
    assert line.endswith("\t\n")
    fields = line[:-1].split("\t")
    assert fields[-1] == ""
    assert len(fields) - 1 == column_count(4) == 18
    assert line.startswith("1.234\t1\t0.100000\t0.200000\t1.000000\t1\t0.100000\t")


def test_absent_groups_are_zero_filled():
    line = format_record(absent_record())
    assert line == "0.005\t-1\t" + "0.000000\t" * 3 + "-1\t" + "0.000000\t" * 12 + "\n"


def test_parse_line_round_trip():
    parsed = parse_line(format_record(full_record()), 4)
    assert parsed.timestamp_ms == 1234
    assert parsed.marker_present and parsed.body_present
    for got, want in zip(parsed.joints, JOINTS):
        assert got.as_tuple() == pytest.approx(want.as_tuple(), abs=1e-6)


def test_parse_line_wrong_field_count():
    with pytest.raises(ValueError):
        parse_line(format_record(full_record()), 3)


def test_writer_truncates_and_reads_back(tmp_path):
    path = tmp_path / "out" / "kindata.txt"
    writer = TrajectoryWriter(path)

    writer.open()
    assert writer.write_records([full_record(1), full_record(2), full_record(3)]) == 3
    writer.close()

    writer.open()
    writer.write_records([absent_record(10)])
    writer.close()
    assert not writer.is_open

    records = read_trajectory(path, 4)
    assert len(records) == 1
    assert records[0] == absent_record(10)


def test_load_trajectory_array(tmp_path):
    path = tmp_path / "kindata.txt"
    writer = TrajectoryWriter(path)
    writer.open()
    writer.write_records([full_record(1000), absent_record(1033)])
    writer.close()

    data = load_trajectory_array(path)
    assert data.shape == (2, 18)
    assert data[0, 0] == pytest.approx(1.0)
    assert data[1, 1] == -1
    assert np.all(data[1, 2:5] == 0)


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("")
    assert load_trajectory_array(path).shape == (0, 0)


def test_write_before_open():
    with pytest.raises(RuntimeError):
        TrajectoryWriter("never.txt").write_records([full_record()])
