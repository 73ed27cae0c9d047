import os.path
import re

import ezdxf

from ..core.exceptions import BadFileError
from ..core.segments import Arc, Circle, Line, Text, Unsupported

# Entity attributes carried through kerf adjustment.
ATTRIBUTE_KEYS = ("layer", "color", "linetype")

DEFAULT_DXF_VERSION = "R2010"


def offset_filename(pathname):
    """
    Default output name for an adjusted drawing, `part.dxf` becomes `part-offset.dxf`.
    """
    directory, basename = os.path.split(pathname)
    basename = re.sub(r"\.dxf$", "", basename, flags=re.IGNORECASE)
    return os.path.join(directory, f"{basename}-offset.dxf")


class DxfLoader:
    @staticmethod
    def load(pathname, channel=None):
        """
        Load dxf content as a list of curve segments.

        Dxf coordinates are used as they are, in drawing units.
        """
        try:
            dxf = ezdxf.readfile(pathname)
        except ezdxf.DXFError:
            try:
                # dxf is low quality. Attempt recovery.
                from ezdxf import recover

                dxf, auditor = recover.readfile(pathname)
            except ezdxf.DXFStructureError as e:
                # Recovery failed, return the BadFileError.
                raise BadFileError(str(e)) from e
        except OSError as e:
            raise BadFileError(str(e)) from e

        dxf_processor = DXFProcessor(dxf, channel=channel)
        return dxf_processor.process(dxf.modelspace())


class DXFProcessor:
    def __init__(self, dxf, channel=None):
        self.dxf = dxf
        self.channel = channel
        self.segments = []
        self.unsupported = {}

    def process(self, entities):
        for entity in entities:
            self.segments.append(self.parse(entity))
        if self.unsupported and self.channel:
            for dxftype, count in self.unsupported.items():
                self.channel(f"{count} unsupported {dxftype} entities in drawing.")
        return self.segments

    @staticmethod
    def attributes(entity):
        attributes = dict()
        for key in ATTRIBUTE_KEYS:
            if entity.dxf.hasattr(key):
                attributes[key] = entity.dxf.get(key)
        return attributes

    def parse(self, entity):
        dxftype = entity.dxftype()
        attributes = self.attributes(entity)
        if dxftype == "LINE":
            #  https://ezdxf.readthedocs.io/en/stable/dxfentities/line.html
            return Line(
                entity.dxf.start,
                entity.dxf.end,
                normal=entity.dxf.extrusion,
                attributes=attributes,
            )
        elif dxftype == "ARC":
            return Arc(
                entity.dxf.center,
                entity.dxf.radius,
                entity.dxf.start_angle,
                entity.dxf.end_angle,
                normal=entity.dxf.extrusion,
                attributes=attributes,
            )
        elif dxftype == "CIRCLE":
            return Circle(
                entity.dxf.center,
                entity.dxf.radius,
                normal=entity.dxf.extrusion,
                attributes=attributes,
            )
        elif dxftype == "TEXT":
            return Text(
                entity.dxf.insert,
                entity.dxf.text,
                height=entity.dxf.get("height", 1.0),
                attributes=attributes,
            )
        elif dxftype == "MTEXT":
            return Text(
                entity.dxf.insert,
                entity.text,
                height=entity.dxf.get("char_height", 1.0),
                attributes=attributes,
            )
        self.unsupported[dxftype] = self.unsupported.get(dxftype, 0) + 1
        return Unsupported(dxftype, attributes=attributes)


class DxfSaver:
    @staticmethod
    def save(pathname, segments, version=DEFAULT_DXF_VERSION, channel=None):
        doc = DxfSaver.document(segments, version=version, channel=channel)
        doc.saveas(pathname)

    @staticmethod
    def write(stream, segments, version=DEFAULT_DXF_VERSION, channel=None):
        doc = DxfSaver.document(segments, version=version, channel=channel)
        doc.write(stream)

    @staticmethod
    def document(segments, version=DEFAULT_DXF_VERSION, channel=None):
        doc = ezdxf.new(version, setup=True)
        msp = doc.modelspace()
        skipped = 0
        collapsed = 0
        for segment in segments:
            dxfattribs = DxfSaver.dxfattribs(doc, segment)
            if isinstance(segment, Line):
                dxfattribs["extrusion"] = _vec(segment.normal)
                msp.add_line(
                    _vec(segment.start), _vec(segment.end), dxfattribs=dxfattribs
                )
            elif isinstance(segment, Arc):
                radius = segment.radius
                start_angle = segment.start_angle
                end_angle = segment.end_angle
                if radius < 0:
                    # A negative radius mirrors the arc through its center.
                    radius = -radius
                    start_angle = (start_angle + 180.0) % 360.0
                    end_angle = (end_angle + 180.0) % 360.0
                dxfattribs["extrusion"] = _vec(segment.normal)
                msp.add_arc(
                    _vec(segment.center),
                    radius,
                    start_angle,
                    end_angle,
                    dxfattribs=dxfattribs,
                )
            elif isinstance(segment, Circle):
                if segment.radius <= 0:
                    # Offset inward past its center, nothing is left to cut.
                    collapsed += 1
                    continue
                dxfattribs["extrusion"] = _vec(segment.normal)
                msp.add_circle(
                    _vec(segment.center), segment.radius, dxfattribs=dxfattribs
                )
            elif isinstance(segment, Text):
                dxfattribs["insert"] = _vec(segment.insert)
                dxfattribs["height"] = segment.height
                msp.add_text(segment.text, dxfattribs=dxfattribs)
            else:
                skipped += 1
        if skipped and channel:
            channel(f"{skipped} unsupported entities could not be written.")
        if collapsed and channel:
            channel(f"{collapsed} circles shrunk to a radius of zero or less were dropped.")
        return doc

    @staticmethod
    def dxfattribs(doc, segment):
        dxfattribs = dict()
        layer = segment.attributes.get("layer")
        if layer is not None:
            if layer not in doc.layers:
                doc.layers.new(layer)
            dxfattribs["layer"] = layer
        color = segment.attributes.get("color")
        if color is not None:
            dxfattribs["color"] = color
        linetype = segment.attributes.get("linetype")
        if linetype is not None and linetype in doc.linetypes:
            dxfattribs["linetype"] = linetype
        return dxfattribs


def _vec(p):
    return tuple(float(c) for c in p)
