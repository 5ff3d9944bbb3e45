
# coding=utf-8


class GeotagError(Exception):
	pass


class DecodeError(GeotagError):
	"""
	Something is wrong with a single photo, the batch carries on without it.
	"""
	pass


class NotAPhoto(DecodeError):
	pass


class NoExif(DecodeError):
	pass


class InvalidFormat(DecodeError):
	pass


class UnexpectedEnd(DecodeError):
	pass


class NoGPSData(DecodeError):
	pass


class IncompleteGPS(DecodeError):
	pass


class FatalError(GeotagError):
	"""
	Not recoverable by skipping a file, stops the whole batch.
	"""
	pass


class CorruptLength(FatalError):
	pass


class CursorStackEmpty(FatalError):
	pass


class Bunch(dict):
	def __getattr__(self, key):
		try:
			return self[key]
		except KeyError:
			raise AttributeError(key)

	def __setattr__(self, key, val):
		self[key] = val

	def __delattr__(self, key):
		del self[key]
