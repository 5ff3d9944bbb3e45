
# coding=utf-8

import io
import logging

from enum import Enum

from photogpx.common import NotAPhoto, NoExif, CorruptLength
from photogpx.structio import FileStructIO


logging.basicConfig()
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class Marker(Enum):
	# Start of Frame
	SOF0 = 0xFFC0
	SOF1 = 0xFFC1
	SOF2 = 0xFFC2
	SOF3 = 0xFFC3
	DHT = 0xFFC4  # define huffman table
	# other
	SOI = 0xFFD8  # start of image
	EOI = 0xFFD9  # end of image
	SOS = 0xFFDA  # start of scan
	DQT = 0xFFDB  # define quantization table
	DRI = 0xFFDD  # define restart interval
	# app segments
	APP0 = 0xFFE0
	APP1 = 0xFFE1
	APP2 = 0xFFE2
	APP12 = 0xFFEC
	APP13 = 0xFFED
	APP14 = 0xFFEE
	COM = 0xFFFE  # comment

	@classmethod
	def name_of(cls, value):
		try:
			return cls(value).name
		except ValueError:
			return "{:x}".format(value)


class State(Enum):
	START = 0
	SCANNING = 1
	DONE = 2


class JFIF:
	"""
	Big Endian
	Markers are two byte patterns, FF followed by the marker id.
	Marker segments carry a two byte length right after the marker, the length includes itself.
	Nothing after SOS is of any interest, it's all entropy coded image data from there.
	"""

	EXIF_IDENTIFIER = b"Exif\x00\x00"

	def __init__(self, handle, name=None):
		self.name = name if name is not None else "<buffer>"
		self.state = State.START
		self.skipped = []
		self.exif = None
		with handle as self.handle:
			self.parse()
		del self.handle

	def read_segment_length(self, marker):
		declared = self.handle.read_marker()
		if declared < 2:
			raise CorruptLength("{} segment declares a length of {} @ {}".format(Marker.name_of(marker), declared, self.handle.tell() - 2))
		return declared - 2

	def step(self):
		if self.state == State.START:
			if self.handle.read_marker() != Marker.SOI.value:
				raise NotAPhoto("{} does not seem to be a photo image file".format(self.name))
			self.state = State.SCANNING
			return

		marker = self.handle.read_marker()
		if marker == Marker.SOS.value:
			self.state = State.DONE
			raise NoExif("No Exif APP1 segment before the image data")

		length = self.read_segment_length(marker)
		logger.debug("Reading {} of length {} @ {}".format(Marker.name_of(marker), length, self.handle.tell()))
		if marker == Marker.APP1.value:
			if length < len(JFIF.EXIF_IDENTIFIER):
				raise CorruptLength("APP1 segment of {} bytes can't hold an Exif identifier".format(length))
			payload = self.handle.read(length)
			if payload.startswith(JFIF.EXIF_IDENTIFIER):
				self.exif = payload[len(JFIF.EXIF_IDENTIFIER):]
				self.state = State.DONE
				return
			# XMP and friends live in APP1 too
			logger.debug("Skipping APP1 {!r}".format(payload[:payload.find(b"\x00")]))
		else:
			self.handle.seek(length, io.SEEK_CUR)
		self.skipped.append((marker, length + 2))

	def parse(self):
		while self.state != State.DONE:
			self.step()
		if self.skipped:
			logger.debug("{}: {}".format(self.name, " ".join("{:x}:{}".format(marker & 0xFF, length) for (marker, length) in self.skipped)))

	@classmethod
	def from_file(cls, path):
		return cls(FileStructIO(str(path)), name=str(path))
