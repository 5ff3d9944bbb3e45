
# coding=utf-8

import pytest

from jpegs import build_jpeg, build_tiff, dms, gps_entries


@pytest.fixture
def photo(tmp_path):
	"""
	Writes a synthetic jpeg to tmp_path and returns its path.
	"""
	def make(name, gps=None, **kwargs):
		tiff_kwargs = {}
		for key in ("ifd0", "byte_order", "first_ifd", "with_gps"):
			if key in kwargs:
				tiff_kwargs[key] = kwargs.pop(key)
		path = tmp_path / name
		path.write_bytes(build_jpeg(build_tiff(gps, **tiff_kwargs), **kwargs))
		return path
	return make


@pytest.fixture
def trip(photo):
	"""
	Five photos of a walk, in the order a directory listing would give them.
	c.jpg is a few meters from a.jpg and should vanish from the track.
	"""
	return [
		photo("a.jpg", gps_entries(dms(52, 7, 30), "N", dms(13, 15, 0), "E", dms(10, 0, 0), "2020:06:15")),
		photo("b.jpg", gps_entries(dms(52, 30, 0), "N", dms(13, 30, 0), "E", dms(9, 0, 0), "2020:06:15")),
		photo("c.jpg", gps_entries(dms(52, 7, 301, 10), "N", dms(13, 15, 0), "E", dms(10, 0, 5), "2020:06:15")),
		photo("d.jpg", gps_entries(dms(1, 30, 0), "S", dms(2, 15, 0), "W", dms(23, 59, 59), "2020:06:14")),
		photo("e.jpg", gps_entries(dms(52, 15, 0), "N", dms(13, 45, 0), "E", dms(8, 15, 30), "2020:07:01"), app0=True),
	]
