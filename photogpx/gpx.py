
# coding=utf-8

import logging

from lxml import etree

from photogpx.waypoint import format_time


logging.basicConfig()
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class GPX:
	"""
	GPX 1.1, one track with one segment holding every waypoint in the order given.

	Times are turned back into dates the same way they were squashed, so a photo
	from the 1st of March can come out as the 31st of February. That's fine, they
	only have to be in the right order.
	"""

	NAMESPACE = "http://www.topografix.com/GPX/1/1"
	VERSION = "1.1"
	CREATOR = "photogpx"
	PRECISION = 5

	def __init__(self, name, names=False):
		self.name = name
		self.names = names

	def tag(self, name):
		return "{{{}}}{}".format(GPX.NAMESPACE, name)

	def coordinate(self, value):
		return "{:.{}f}".format(value, GPX.PRECISION)

	def build(self, track):
		gpx = etree.Element(self.tag("gpx"), nsmap={None: GPX.NAMESPACE})
		gpx.set("version", GPX.VERSION)
		gpx.set("creator", GPX.CREATOR)

		metadata = etree.SubElement(gpx, self.tag("metadata"))
		etree.SubElement(metadata, self.tag("name")).text = self.name

		trk = etree.SubElement(gpx, self.tag("trk"))
		etree.SubElement(trk, self.tag("name")).text = self.name
		trkseg = etree.SubElement(trk, self.tag("trkseg"))
		for waypoint in track:
			trkpt = etree.SubElement(trkseg, self.tag("trkpt"))
			trkpt.set("lat", self.coordinate(waypoint.latitude))
			trkpt.set("lon", self.coordinate(waypoint.longitude))
			etree.SubElement(trkpt, self.tag("time")).text = format_time(waypoint.time)
			if self.names and waypoint.filename:
				etree.SubElement(trkpt, self.tag("name")).text = waypoint.filename
		return gpx

	def dumps(self, track):
		return etree.tostring(self.build(track), pretty_print=True, xml_declaration=True, encoding="UTF-8")

	def write(self, track, handle):
		data = self.dumps(track)
		handle.write(data)
		logger.debug("Wrote {} bytes of GPX for {!r}".format(len(data), self.name))
		return len(data)
