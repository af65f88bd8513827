"""
Drawing helpers for geometry objects: surfaces and arrows.

Usage
-----
    from trackvis.visualization.geometry import draw_surface, draw_arrow_forward

    draw_surface(sink, surface, gctx, wireframe=True, color=(235, 198, 52))
    draw_arrow_forward(sink, start, end, 0.025, 0.05, 2.0, 72, (20, 120, 20))
"""

import logging

import numpy as np

from trackvis.geometry import Polyhedron, Transform3D, make_curvilinear_unit_vectors

logger = logging.getLogger(__name__)


def draw_surface(sink, surface, gctx=None, transform: Transform3D = None,
                 lseg: int = 72, wireframe: bool = False, color=(235, 198, 52),
                 triangulate: bool = False):
    """Draw the outline polyhedron of *surface*.

    Parameters
    ----------
    sink : VisualizationSink
    surface : Surface
    gctx : GeometryContext or None
    transform : Transform3D or None
        Additional transform applied after the surface placement.
    lseg : int
        Segments for curved outlines.
    wireframe : bool
        Draw edges only.
    color : tuple of int
    triangulate : bool
        Send the fan triangulation instead of the outline faces; a wireframe
        then shows the fan spokes.
    """
    hedron = surface.polyhedron(gctx, transform, lseg)
    return hedron.draw(sink, wireframe=wireframe, color=color, triangulate=triangulate)


def _ring(center, u, v, radius, lseg):
    phis = -np.pi + np.arange(lseg) * (2 * np.pi / lseg)
    return center + radius * (np.outer(np.cos(phis), u) + np.outer(np.sin(phis), v))


def arrow_polyhedron(start, end, shaft_radius: float = 0.025, head_radius: float = 0.05,
                     head_length_scale: float = 2.0, lseg: int = 72) -> Polyhedron:
    """Shaft cylinder, conical head and head base plate as one polyhedron.

    The head is ``head_length_scale * head_radius`` long and ends at *end*;
    it is shortened to the full arrow length for very short arrows.
    """
    start = np.asarray(start, dtype=np.float64)
    end = np.asarray(end, dtype=np.float64)
    length = np.linalg.norm(end - start)
    if length == 0.:
        raise ValueError("Arrow start and end coincide")
    direction = (end - start) / length
    u, v = make_curvilinear_unit_vectors(direction)

    head_length = min(head_length_scale * head_radius, length)
    head_base = end - head_length * direction

    # Head cone: base ring fanned to the tip
    head = Polyhedron.from_convex_loop(
        np.vstack([_ring(head_base, u, v, head_radius, lseg), end]), center_last=True)
    # Base plate closing the cone
    plate = Polyhedron.from_convex_loop(
        np.vstack([_ring(head_base, u, v, head_radius, lseg), head_base]), center_last=True)
    hedron = head.merge(plate)

    if head_length < length:
        bottom = _ring(start, u, v, shaft_radius, lseg)
        top = _ring(head_base, u, v, shaft_radius, lseg)
        faces = []
        triangles = []
        for i in range(lseg):
            j = (i + 1) % lseg
            quad = (i, j, lseg + j, lseg + i)
            faces.append(quad)
            triangles.extend([(quad[0], quad[1], quad[2]), (quad[0], quad[2], quad[3])])
        hedron = Polyhedron(np.vstack([bottom, top]), faces, triangles).merge(hedron)
    return hedron


def draw_arrow_forward(sink, start, end, shaft_radius: float = 0.025,
                       head_radius: float = 0.05, head_length_scale: float = 2.0,
                       lseg: int = 72, color=(20, 120, 20)):
    """Draw an arrow from *start* pointing at *end* as a single filled mesh.

    Nothing is drawn (and None returned) when *start* and *end* coincide.
    """
    if np.linalg.norm(np.asarray(end, dtype=np.float64) - np.asarray(start, dtype=np.float64)) == 0.:
        logger.debug("Zero-length arrow at %s not drawn", start)
        return None
    hedron = arrow_polyhedron(start, end, shaft_radius, head_radius, head_length_scale, lseg)
    return hedron.draw(sink, wireframe=False, color=color)
