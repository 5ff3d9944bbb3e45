
# coding=utf-8

import logging

from enum import Enum

from photogpx.common import Bunch, InvalidFormat, NoGPSData, IncompleteGPS
from photogpx.structio import ByteCursor, Endianess
from photogpx.waypoint import Coordinate, Quadrant, Waypoint, encode_time


logging.basicConfig()
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class Type(Enum):
	BYTE = 1
	ASCII = 2
	SHORT = 3
	LONG = 4
	RATIONAL = 5


class IFDTagType(Enum):
	# Only what shows up in the 0th IFD of a camera jpeg, everything else stays a plain int
	ImageDescription = 0x10E
	Make = 0x10F
	Model = 0x110
	Orientation = 0x112
	XResolution = 0x11A
	YResolution = 0x11B
	ResolutionUnit = 0x128
	Software = 0x131
	DateTime = 0x132
	YCbCrPositioning = 0x213
	Copyright = 0x8298
	# IFD locations
	ExifIFD = 0x8769
	GPSIFD = 0x8825


class GPSTagType(Enum):
	VersionID = 0x0
	LatitudeRef = 0x1
	Latitude = 0x2
	LongitudeRef = 0x3
	Longitude = 0x4
	AltitudeRef = 0x5
	Altitude = 0x6
	TimeStamp = 0x7
	Satellites = 0x8
	Status = 0x9
	MeasureMode = 0xA
	DOP = 0xB
	SpeedRef = 0xC
	Speed = 0xD
	TrackRef = 0xE
	Track = 0xF
	ImgDirectionRef = 0x10
	ImgDirection = 0x11
	MapDatum = 0x12
	DestLatitudeRef = 0x13
	DestLatitude = 0x14
	DestLongitudeRef = 0x15
	DestLongitude = 0x16
	DestBearingRef = 0x17
	DestBearing = 0x18
	DestDistanceRef = 0x19
	DestDistance = 0x1A
	ProcessingMethod = 0x1B
	AreaInformation = 0x1C
	DateStamp = 0x1D
	Differential = 0x1E
	HPositioningError = 0x1F

GPSTagType.ESSENTIAL = frozenset([
	GPSTagType.LatitudeRef,
	GPSTagType.Latitude,
	GPSTagType.LongitudeRef,
	GPSTagType.Longitude,
	GPSTagType.TimeStamp,
	GPSTagType.DateStamp,
])


def read_rational_triple(raw, offset):
	"""
	Three unsigned rationals (u32 numerator, u32 denominator) stored at offset, as floats.
	Degrees/minutes/seconds for coordinates, hours/minutes/seconds for the timestamp.
	"""
	values = []
	with raw.saved():
		raw.seek_absolute(offset)
		for i in range(3):
			numerator = raw.read_uint()
			denominator = raw.read_uint()
			if denominator == 0:
				raise InvalidFormat("Rational {}/{} @ {} divides by zero".format(numerator, denominator, offset + i * 8))
			values.append(numerator / denominator)
	return tuple(values)


def parse_number(field):
	# bytes.isdigit only accepts ascii digits
	if not field.isdigit():
		raise InvalidFormat("Failed to convert {!r} to a number".format(field))
	return int(field)


def read_datestamp(raw, offset):
	"""
	Date is expressed in form "YYYY:MM:DD"
	"""
	with raw.saved():
		raw.seek_absolute(offset)
		date = raw.read(10)
	year = parse_number(date[0:4])
	month = parse_number(date[5:7])
	day = parse_number(date[8:10])
	if not 1 <= month <= 12 or not 1 <= day <= 31:
		raise InvalidFormat("Date {!r} is out of range".format(date))
	return (year, month, day)


class TIFFHeader(Bunch):
	"""
	Byte order, 42 and the offset of the 0th IFD. Only "II" with the IFD right after the header is handled.
	"""
	@classmethod
	def from_structio(cls, raw):
		self = cls()
		self.byte_order = raw.read(2)
		self.size = raw.read_ushort()
		self.offset = raw.read_uint()
		return self

	def is_valid(self):
		return self.byte_order == b"II" and self.offset == 8

	def __str__(self):
		return "tiff {!r}, size {}, offset {}".format(self.byte_order, self.size, self.offset)


class IFDEntry(Bunch):
	"""
	IFD entries are 12 bytes, the last 4 hold either the value itself or an offset to it
	"""
	@classmethod
	def from_structio(cls, raw, tag_type=IFDTagType):
		self = cls()
		self.tag = raw.read_ushort()
		try:
			self.tag = tag_type(self.tag)
		except ValueError:
			pass

		self.type = raw.read_ushort()
		try:
			self.type = Type(self.type)
		except ValueError:
			logger.debug("Tag had invalid type {}".format(self.type))

		self.count = raw.read_uint()
		self.value = raw.read_uint()
		return self

	def __repr__(self):
		s = "<"
		if isinstance(self.tag, int):
			s += "0x{:x}".format(self.tag)
		else:
			s += "{}".format(self.tag)
		return s + ":{}#{} = {}>".format(self.type, self.count, self.value)


class EXIF(Bunch):
	"""
	The TIFF structure inside an Exif APP1 segment, offsets count from the start of the TIFF header.
	"""
	ESSENTIAL_ENTRIES = 6

	def __init__(self, handle, name=None):
		self.name = name
		with handle as self.raw:
			self.header = TIFFHeader.from_structio(self.raw)
			if not self.header.is_valid():
				raise InvalidFormat("Bad exif header: {}".format(self.header))
			self.waypoint = self.parse()
		del self.raw

	def parse(self):
		count = self.raw.read_ushort()
		logger.debug("0th IFD with {} entries".format(count))
		for i in range(count):
			logger.debug("Reading IFDEntry#{} @ {}".format(i, self.raw.tell()))
			entry = IFDEntry.from_structio(self.raw)
			if entry.tag == IFDTagType.GPSIFD:
				logger.debug("Reading GPS IFD @ {}".format(entry.value))
				self.raw.seek_absolute(entry.value)
				return self.parse_gps()
		raise NoGPSData("No GPS section found")

	def parse_gps(self):
		latitude = Coordinate()
		longitude = Coordinate()
		time = 0
		essentials = 0

		count = self.raw.read_ushort()
		for i in range(count):
			entry = IFDEntry.from_structio(self.raw, tag_type=GPSTagType)
			logger.debug("GPS entry#{} {!r}".format(i, entry))
			if entry.tag not in GPSTagType.ESSENTIAL:
				continue
			essentials += 1

			if entry.tag == GPSTagType.LatitudeRef:
				latitude.quadrant = Quadrant.parse(entry.value, Quadrant.LATITUDE)
			elif entry.tag == GPSTagType.LongitudeRef:
				longitude.quadrant = Quadrant.parse(entry.value, Quadrant.LONGITUDE)
			elif entry.tag == GPSTagType.Latitude:
				latitude.set(*read_rational_triple(self.raw, entry.value))
			elif entry.tag == GPSTagType.Longitude:
				longitude.set(*read_rational_triple(self.raw, entry.value))
			elif entry.tag == GPSTagType.TimeStamp:
				(hours, minutes, seconds) = read_rational_triple(self.raw, entry.value)
				time += int(hours * 3600 + minutes * 60 + seconds)
			elif entry.tag == GPSTagType.DateStamp:
				time += encode_time(*read_datestamp(self.raw, entry.value))

		if essentials != EXIF.ESSENTIAL_ENTRIES:
			raise IncompleteGPS("Missing essential GPS entry/ies, found {} of {}".format(essentials, EXIF.ESSENTIAL_ENTRIES))

		logger.debug("{}: {}, {}".format(self.name, latitude, longitude))
		# quadrants may come before or after their values, so signs go on last
		return Waypoint(latitude.to_decimal(), longitude.to_decimal(), time, filename=self.name)

	@classmethod
	def from_buffer(cls, buf, name=None):
		return cls(ByteCursor(buf, endian=Endianess.LITTLE), name=name)
