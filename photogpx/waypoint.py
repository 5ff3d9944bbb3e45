
# coding=utf-8

from enum import Enum

from photogpx.common import InvalidFormat


MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
# Every month is pretended to have 31 days, good enough to put photos in order.
MONTH = 31 * DAY
YEAR = 12 * MONTH


def encode_time(year, month, day, hour=0, minute=0, second=0):
	"""
	Squash a date and time into one ordered integer, the inverse of decode_time.
	This is not a unix timestamp.
	"""
	return year * YEAR + (month - 1) * MONTH + (day - 1) * DAY + hour * HOUR + minute * MINUTE + second


def decode_time(value):
	(value, second) = divmod(value, 60)
	(value, minute) = divmod(value, 60)
	(value, hour) = divmod(value, 24)
	(value, day) = divmod(value, 31)
	(year, month) = divmod(value, 12)
	return (year, month + 1, day + 1, hour, minute, second)


def format_time(value):
	return "{:04d}-{:02d}-{:02d}T{:02d}:{:02d}:{:02d}Z".format(*decode_time(value))


class Quadrant(Enum):
	N = "N"
	S = "S"
	E = "E"
	W = "W"

	@property
	def sign(self):
		return -1 if self in (Quadrant.S, Quadrant.W) else 1

	@classmethod
	def parse(cls, value, allowed):
		try:
			quadrant = cls(chr(value))
		except (ValueError, OverflowError):
			raise InvalidFormat("Invalid quadrant 0x{:x}".format(value))
		if quadrant not in allowed:
			raise InvalidFormat("Quadrant {} is not one of {}".format(quadrant.name, "/".join(i.name for i in allowed)))
		return quadrant

Quadrant.LATITUDE = (Quadrant.N, Quadrant.S)
Quadrant.LONGITUDE = (Quadrant.E, Quadrant.W)


class Coordinate:
	# decimal places kept
	PRECISION = 5

	def __init__(self, degrees=0, arcminutes=0, arcseconds=0, quadrant=None):
		self.degrees = float(degrees)
		self.arcminutes = float(arcminutes)
		self.arcseconds = float(arcseconds)
		self.quadrant = quadrant

	def set(self, degrees, arcminutes, arcseconds):
		self.degrees = float(degrees)
		self.arcminutes = float(arcminutes)
		self.arcseconds = float(arcseconds)

	def to_decimal(self):
		dec = self.degrees + (self.arcminutes * 60 + self.arcseconds) / 3600
		dec = round(dec, Coordinate.PRECISION)
		if self.quadrant is not None:
			dec = self.quadrant.sign * dec
		return dec

	def __str__(self):
		return "{}° {}' {}'' {}".format(self.degrees, self.arcminutes, self.arcseconds, self.quadrant.name if self.quadrant else "?")


class Waypoint:
	def __init__(self, latitude=0.0, longitude=0.0, time=0, filename=None):
		self.latitude = latitude
		self.longitude = longitude
		self.time = time
		self.filename = filename

	def __str__(self):
		return "{:.5f} {:.5f} @ {}".format(self.latitude, self.longitude, format_time(self.time))

	def __repr__(self):
		if self.filename:
			return "<Waypoint {} ({})>".format(self, self.filename)
		return "<Waypoint {}>".format(self)
