
# coding=utf-8

import struct

import pytest

from jpegs import build_tiff, dms, gps_entries

from photogpx.common import IncompleteGPS, InvalidFormat, NoGPSData, UnexpectedEnd
from photogpx.exif import EXIF, TIFFHeader, read_rational_triple
from photogpx.structio import ByteCursor
from photogpx.waypoint import decode_time


def test_rational_triple():
	raw = ByteCursor(b"\x00" * 4 + struct.pack("<6I", 1, 2, 30, 1, 7, 4))
	assert read_rational_triple(raw, 4) == (0.5, 30.0, 1.75)
	# the caller's position is left alone
	assert raw.tell() == 0


def test_rational_zero_denominator():
	raw = ByteCursor(struct.pack("<6I", 1, 1, 1, 0, 1, 1))
	with pytest.raises(InvalidFormat):
		read_rational_triple(raw, 0)
	assert raw.tell() == 0


def test_rational_truncated():
	raw = ByteCursor(struct.pack("<5I", 1, 1, 1, 1, 1))
	with pytest.raises(UnexpectedEnd):
		read_rational_triple(raw, 0)


def test_header():
	header = TIFFHeader.from_structio(ByteCursor(b"II*\x00\x08\x00\x00\x00"))
	assert header.is_valid()
	assert header.size == 42
	assert not TIFFHeader.from_structio(ByteCursor(b"MM\x00*\x00\x00\x00\x08")).is_valid()
	assert not TIFFHeader.from_structio(ByteCursor(b"II*\x00\x10\x00\x00\x00")).is_valid()


def test_waypoint():
	waypoint = EXIF.from_buffer(build_tiff(), name="a.jpg").waypoint
	assert waypoint.latitude == -1.5
	assert waypoint.longitude == -2.25
	assert decode_time(waypoint.time) == (2020, 6, 15, 10, 0, 0)
	assert waypoint.filename == "a.jpg"


def test_northeast():
	gps = gps_entries(dms(52, 30, 0), "N", dms(13, 15, 0), "E", dms(8, 15, 30), "2021:12:31")
	waypoint = EXIF.from_buffer(build_tiff(gps)).waypoint
	assert (waypoint.latitude, waypoint.longitude) == (52.5, 13.25)
	assert decode_time(waypoint.time) == (2021, 12, 31, 8, 15, 30)


def test_quadrant_after_value():
	gps = list(reversed(gps_entries()))
	waypoint = EXIF.from_buffer(build_tiff(gps)).waypoint
	assert (waypoint.latitude, waypoint.longitude) == (-1.5, -2.25)


def test_other_tags_ignored():
	gps = [(0x0, 0x00000302), (0x6, ((120, 1), (0, 1), (0, 1)))] + gps_entries() + [(0x12, "WGS-84")]
	ifd0 = [(0x112, 1), (0x128, 2)]
	waypoint = EXIF.from_buffer(build_tiff(gps, ifd0=ifd0)).waypoint
	assert waypoint.latitude == -1.5


def test_incomplete():
	gps = [entry for entry in gps_entries() if entry[0] != 0x7]
	with pytest.raises(IncompleteGPS):
		EXIF.from_buffer(build_tiff(gps))


def test_duplicate_entries_count():
	# a repeated tag fills the gap of a missing one, only the total is checked
	gps = gps_entries()
	gps[4] = gps[1]
	waypoint = EXIF.from_buffer(build_tiff(gps)).waypoint
	assert decode_time(waypoint.time) == (2020, 6, 15, 0, 0, 0)


def test_too_many_entries():
	gps = gps_entries() + [(0x1, "N")]
	with pytest.raises(IncompleteGPS):
		EXIF.from_buffer(build_tiff(gps))


def test_no_gps():
	with pytest.raises(NoGPSData):
		EXIF.from_buffer(build_tiff(ifd0=[(0x112, 1)], with_gps=False))


@pytest.mark.parametrize("kwargs", [
	{"byte_order": b"MM"},
	{"first_ifd": 16},
])
def test_bad_header(kwargs):
	with pytest.raises(InvalidFormat):
		EXIF.from_buffer(build_tiff(**kwargs))


@pytest.mark.parametrize("date", ["2020:0a:15", "20x0:06:15", "2020:13:01", "2020:06:00", "2020:00:15"])
def test_bad_date(date):
	with pytest.raises(InvalidFormat):
		EXIF.from_buffer(build_tiff(gps_entries(date=date)))


def test_bad_quadrant():
	with pytest.raises(InvalidFormat):
		EXIF.from_buffer(build_tiff(gps_entries(lat_ref="E")))


def test_zero_denominator_in_photo():
	gps = gps_entries(lat=((1, 1), (30, 0), (0, 1)))
	with pytest.raises(InvalidFormat):
		EXIF.from_buffer(build_tiff(gps))


def test_offset_outside_payload():
	tiff = build_tiff()
	# chop off the date string and part of the rationals
	with pytest.raises(UnexpectedEnd):
		EXIF.from_buffer(tiff[:-20])
