
# coding=utf-8

import logging
import math

from enum import Enum


logging.basicConfig()
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

EARTH_RADIUS = 6371000  # mean, in meters


def haversine(lat1, lon1, lat2, lon2, radius=EARTH_RADIUS):
	"""
	Great-circle distance in meters between two points given in decimal degrees.
	"""
	phi1 = math.radians(lat1)
	phi2 = math.radians(lat2)
	dphi = math.radians(lat2 - lat1)
	dlambda = math.radians(lon2 - lon1)

	a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
	# rounding can push a past 1 for antipodal points
	a = min(1.0, a)
	c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
	return radius * c


class Dedup(Enum):
	# drop photos taken within MIN_DISTANCE of the previous one, bursts mostly
	DISTANCE = "distance"
	# legacy, only drops photos with the exact same timestamp
	TIME = "time"


class Track:
	DEDUP = Dedup.DISTANCE
	MIN_DISTANCE = 5.0
	EARTH_RADIUS = EARTH_RADIUS

	def __init__(self, waypoints=None, dedup=None, min_distance=None):
		self.waypoints = list(waypoints) if waypoints is not None else []
		self.dedup = dedup if dedup is not None else Track.DEDUP
		self.min_distance = min_distance if min_distance is not None else Track.MIN_DISTANCE

	def __len__(self):
		return len(self.waypoints)

	def __iter__(self):
		return iter(self.waypoints)

	def append(self, waypoint):
		self.waypoints.append(waypoint)

	def sort(self):
		# list.sort is stable, photos with equal times keep the order they were given in
		self.waypoints.sort(key=lambda waypoint: waypoint.time)

	def is_duplicate(self, previous, waypoint):
		if self.dedup == Dedup.TIME:
			return waypoint.time == previous.time
		distance = haversine(previous.latitude, previous.longitude, waypoint.latitude, waypoint.longitude, radius=Track.EARTH_RADIUS)
		return distance <= self.min_distance

	def filter(self):
		"""
		Drops every waypoint that duplicates the last one kept, returns how many went.
		Expects the track to be sorted already.
		"""
		if not self.waypoints:
			return 0
		kept = [self.waypoints[0]]
		for waypoint in self.waypoints[1:]:
			if self.is_duplicate(kept[-1], waypoint):
				logger.debug("Dropping {!r}, duplicate of {!r}".format(waypoint, kept[-1]))
				continue
			kept.append(waypoint)
		dropped = len(self.waypoints) - len(kept)
		self.waypoints = kept
		return dropped

	def finalize(self):
		self.sort()
		dropped = self.filter()
		logger.info("{} waypoints, {} duplicates dropped ({} dedup)".format(len(self), dropped, self.dedup.value))
		return dropped
