
# coding=utf-8

import io
import struct

from contextlib import contextmanager
from enum import Enum

from photogpx.common import UnexpectedEnd, CursorStackEmpty


class Endianess(Enum):
	BIG = 0xFEFF
	LITTLE = 0xFFFE

	def get_structs(self):
		return Endianess.structs[self]

Endianess.structs = {
	Endianess.BIG: {
		"ushort": struct.Struct(">H"),
		"uint": struct.Struct(">I"),
	},
	Endianess.LITTLE: {
		"ushort": struct.Struct("<H"),
		"uint": struct.Struct("<I"),
	}
}


class StructIO(object):
	"""
	Typed reads on top of anything with a read(n) that returns exactly n bytes or raises.
	"""

	def set_endian(self, endian):
		self.endian = endian
		self.structs = endian.get_structs()

	def read_ushort(self):
		return self.structs["ushort"].unpack(self.read(2))[0]

	def read_uint(self):
		return self.structs["uint"].unpack(self.read(4))[0]

	def read_marker(self):
		"""
		JPEG markers and segment lengths are always big endian, whatever the cursor is set to.
		"""
		return Endianess.structs[Endianess.BIG]["ushort"].unpack(self.read(2))[0]


class FileStructIO(io.FileIO, StructIO):
	def __init__(self, path, endian=Endianess.BIG):
		io.FileIO.__init__(self, path, "rb")
		self.set_endian(endian)

	def read(self, size=-1):
		data = io.FileIO.read(self, size)
		if size >= 0 and len(data) != size:
			raise UnexpectedEnd("Wanted {} bytes but only {} left @ {}".format(size, len(data), self.tell()))
		return data


class ByteCursor(io.BytesIO, StructIO):
	"""
	An in-memory payload with a stack of saved positions.

	Offsets stored inside an IFD are absolute within the payload, so following one means
	jumping away from the entry being iterated and coming back afterwards:

		with cursor.saved():
			cursor.seek_absolute(entry.value)
			data = cursor.read(24)
	"""

	def __init__(self, data, endian=Endianess.LITTLE):
		io.BytesIO.__init__(self, data)
		self.length = len(data)
		self.positions = []
		self.set_endian(endian)

	def read(self, size):
		start = self.tell()
		if size < 0 or start + size > self.length:
			raise UnexpectedEnd("Wanted {} bytes @ {} of a {} byte buffer".format(size, start, self.length))
		return io.BytesIO.read(self, size)

	def seek_absolute(self, offset):
		if offset < 0 or offset >= self.length:
			raise UnexpectedEnd("Offset {} outside of a {} byte buffer".format(offset, self.length))
		self.seek(offset)

	def save_position(self):
		self.positions.append(self.tell())

	def restore_position(self):
		if not self.positions:
			raise CursorStackEmpty("Restoring a position that was never saved")
		self.seek(self.positions.pop())

	@contextmanager
	def saved(self):
		self.save_position()
		try:
			yield self
		finally:
			self.restore_position()
