
# coding=utf-8

import pytest

from photogpx.common import CursorStackEmpty, UnexpectedEnd
from photogpx.structio import ByteCursor, Endianess


def test_read_advances():
	raw = ByteCursor(b"\x01\x02\x03\x04")
	assert raw.read(2) == b"\x01\x02"
	assert raw.tell() == 2
	assert raw.read(2) == b"\x03\x04"


def test_read_past_end():
	raw = ByteCursor(b"\x01\x02\x03")
	raw.read(2)
	with pytest.raises(UnexpectedEnd):
		raw.read(2)


def test_seek_absolute_bounds():
	raw = ByteCursor(b"\x00" * 4)
	raw.seek_absolute(3)
	assert raw.tell() == 3
	with pytest.raises(UnexpectedEnd):
		raw.seek_absolute(4)


def test_endianess():
	assert ByteCursor(b"\x01\x02").read_ushort() == 0x0201
	assert ByteCursor(b"\x01\x02", endian=Endianess.BIG).read_ushort() == 0x0102
	assert ByteCursor(b"\x01\x00\x00\x00").read_uint() == 1
	# markers ignore the configured byte order
	assert ByteCursor(b"\xff\xd8").read_marker() == 0xFFD8


def test_save_restore():
	raw = ByteCursor(bytes(range(16)))
	raw.read(3)
	raw.save_position()
	raw.seek_absolute(10)
	raw.save_position()
	raw.seek_absolute(1)
	raw.restore_position()
	assert raw.tell() == 10
	raw.restore_position()
	assert raw.tell() == 3


def test_restore_without_save():
	raw = ByteCursor(b"\x00")
	with pytest.raises(CursorStackEmpty):
		raw.restore_position()


def test_saved_restores_on_error():
	raw = ByteCursor(bytes(8))
	raw.read(2)
	with pytest.raises(UnexpectedEnd):
		with raw.saved():
			raw.seek_absolute(6)
			raw.read(4)
	assert raw.tell() == 2
	assert raw.positions == []
