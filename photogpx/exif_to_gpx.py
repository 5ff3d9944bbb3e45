
# coding=utf-8

import argparse
import logging
import sys

from photogpx import exif, gpx, jfif, track
from photogpx.common import DecodeError
from photogpx.exif import EXIF
from photogpx.gpx import GPX
from photogpx.jfif import JFIF
from photogpx.track import Dedup, Track


logging.basicConfig()
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def parse_file(path):
	"""
	Decode the GPS position and time of one photo.

	Raises a DecodeError when the photo has nothing usable, anything else (OSError,
	FatalError) means the batch should stop.
	"""
	photo = JFIF.from_file(path)
	return EXIF.from_buffer(photo.exif, name=str(path)).waypoint


def process_files(paths, waypoints=None):
	if waypoints is None:
		waypoints = Track()
	for path in paths:
		try:
			waypoint = parse_file(path)
		except DecodeError as e:
			logger.warning("Skipping {}: {}".format(path, e))
			continue
		logger.debug("{}: {}".format(path, waypoint))
		waypoints.append(waypoint)
	return waypoints


def main(argv=None):
	parser = argparse.ArgumentParser(description="Turn the GPS tags of jpeg photos into a GPX track.")
	parser.add_argument("-D", "--debug", action="store_true")
	parser.add_argument("-n", "--name", required=True, help="name of the map")
	parser.add_argument("-o", "--output", help="GPX file to write, stdout if omitted")
	parser.add_argument("--dedup", choices=[i.value for i in Dedup], default=Track.DEDUP.value)
	parser.add_argument("--min-distance", type=float, default=Track.MIN_DISTANCE, help="meters, for distance dedup")
	parser.add_argument("--names", action="store_true", help="name each trkpt after its photo")
	parser.add_argument("files", nargs="+")
	args = parser.parse_args(argv)

	if args.debug:
		for module in (exif, gpx, jfif, track, sys.modules[__name__]):
			module.logger.setLevel(logging.DEBUG)

	waypoints = process_files(args.files, Track(dedup=Dedup(args.dedup), min_distance=args.min_distance))
	if len(waypoints) == 0:
		logger.error("None of the {} files had usable GPS data".format(len(args.files)))
		return 1
	waypoints.finalize()

	writer = GPX(args.name, names=args.names)
	if args.output:
		with open(args.output, "wb") as f:
			writer.write(waypoints, f)
	else:
		writer.write(waypoints, sys.stdout.buffer)
		sys.stdout.flush()
	return 0

if __name__ == '__main__':
	sys.exit(main())
