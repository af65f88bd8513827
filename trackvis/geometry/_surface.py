"""
Reference surfaces and detector elements.

A surface is a placement transform plus one of a closed set of bounds
variants. Variant-specific geometry (the polyhedron outline) is looked up in
``bounds_polyhedron_methods`` by the bounds ``kind`` rather than through a
class hierarchy.

Local coordinates are Cartesian ``(x, y)`` in the surface plane for every
bounds kind; the surface normal is the local z-axis.

Usage
-----
    from trackvis.geometry import DetectorElement, RectangleBounds, Transform3D

    element = DetectorElement(7, Transform3D.from_translation([0., 0., 100.]),
                              RectangleBounds(10., 20.), thickness=0.15)
    surface = element.surface
    x = surface.local_to_global(gctx, [1., 2.])
"""

from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from trackvis._registry import MethodRegistry
from trackvis.geometry._polyhedron import Polyhedron, convex_face_mesh
from trackvis.geometry._transform import Transform3D

bounds_polyhedron_methods = MethodRegistry("bounds")


# ---------------------------------------------------------------------------
# Bounds variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RectangleBounds:
    """Rectangle centered on the local origin, given by its half lengths."""
    half_x: float
    half_y: float
    kind: str = field(default='rectangle', init=False)

    def __post_init__(self):
        if self.half_x <= 0 or self.half_y <= 0:
            raise ValueError("RectangleBounds half lengths must be positive")

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'half_x': self.half_x, 'half_y': self.half_y}


@dataclass(frozen=True)
class RadialBounds:
    """Disc (``r_min == 0``) or annulus centered on the local origin."""
    r_min: float
    r_max: float
    kind: str = field(default='radial', init=False)

    def __post_init__(self):
        if self.r_min < 0 or self.r_max <= self.r_min:
            raise ValueError("RadialBounds need 0 <= r_min < r_max")

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'r_min': self.r_min, 'r_max': self.r_max}


SurfaceBounds = Union[RectangleBounds, RadialBounds]


def bounds_from_dict(data: dict) -> SurfaceBounds:
    """Inverse of ``bounds.to_dict()``."""
    kind = data.get('kind')
    if kind == 'rectangle':
        return RectangleBounds(float(data['half_x']), float(data['half_y']))
    if kind == 'radial':
        return RadialBounds(float(data['r_min']), float(data['r_max']))
    raise ValueError(f"Unknown bounds kind: {kind!r}")


def _rectangle_polyhedron(bounds: RectangleBounds, lseg: int) -> Polyhedron:
    hx, hy = bounds.half_x, bounds.half_y
    vertices = np.array([[-hx, -hy, 0.], [hx, -hy, 0.], [hx, hy, 0.], [-hx, hy, 0.]])
    return Polyhedron.from_convex_loop(vertices)


def _ring(radius: float, lseg: int) -> np.ndarray:
    phis = -np.pi + np.arange(lseg) * (2 * np.pi / lseg)
    return np.column_stack([radius * np.cos(phis), radius * np.sin(phis), np.zeros(lseg)])


def _radial_polyhedron(bounds: RadialBounds, lseg: int) -> Polyhedron:
    outer = _ring(bounds.r_max, lseg)
    if bounds.r_min == 0.:
        return Polyhedron.from_convex_loop(np.vstack([outer, np.zeros(3)]), center_last=True)

    # Annulus: outer ring indices [0, lseg), inner ring [lseg, 2 lseg)
    inner = _ring(bounds.r_min, lseg)
    faces = []
    triangles = []
    for i in range(lseg):
        j = (i + 1) % lseg
        quad = (i, j, lseg + j, lseg + i)
        faces.append(quad)
        triangles.append((quad[0], quad[1], quad[2]))
        triangles.append((quad[0], quad[2], quad[3]))
    return Polyhedron(np.vstack([outer, inner]), faces, triangles)


bounds_polyhedron_methods.register('rectangle', _rectangle_polyhedron)
bounds_polyhedron_methods.register('radial', _radial_polyhedron)


# ---------------------------------------------------------------------------
# Surface and detector element
# ---------------------------------------------------------------------------

class Surface:
    """Bounded planar surface placed by a local-to-global transform.

    Parameters
    ----------
    transform : Transform3D
        Nominal placement.
    bounds : RectangleBounds or RadialBounds
    identifier : int or None
        Detector element identifier, used to look up alignment corrections
        in a ``GeometryContext``.
    """

    def __init__(self, transform: Transform3D, bounds: SurfaceBounds,
                 identifier: Optional[int] = None):
        self._transform = transform
        self.bounds = bounds
        self.identifier = identifier

    def transform(self, gctx=None) -> Transform3D:
        """Local-to-global transform, aligned if *gctx* carries a correction."""
        if gctx is not None and self.identifier is not None:
            aligned = gctx.alignment.get(self.identifier)
            if aligned is not None:
                return aligned
        return self._transform

    def center(self, gctx=None) -> np.ndarray:
        return self.transform(gctx).translation.copy()

    def normal(self, gctx=None) -> np.ndarray:
        return self.transform(gctx).rotation[:, 2].copy()

    def local_to_global(self, gctx, lposition) -> np.ndarray:
        loc = np.asarray(lposition, dtype=np.float64)
        return self.transform(gctx).apply([loc[0], loc[1], 0.])

    def global_to_local(self, gctx, position) -> np.ndarray:
        """Project a global point into the surface frame, dropping the normal component."""
        return self.transform(gctx).inverse().apply(position)[:2]

    def polyhedron(self, gctx=None, transform: Optional[Transform3D] = None,
                   lseg: int = 72) -> Polyhedron:
        """Outline of the surface in the global frame (optionally moved by *transform*)."""
        local = bounds_polyhedron_methods[self.bounds.kind](self.bounds, lseg)
        placement = self.transform(gctx)
        if transform is not None:
            placement = transform @ placement
        return Polyhedron(placement.apply(local.vertices), local.faces, local.triangular_mesh)

    def __repr__(self):
        return f"Surface(bounds={self.bounds!r}, identifier={self.identifier!r})"


@dataclass
class DetectorElement:
    """Sensitive detector element owning a single planar surface.

    Attributes
    ----------
    identifier : int
    nominal_transform : Transform3D
    bounds : RectangleBounds or RadialBounds
    thickness : float
        Material thickness outside the surface plane.
    """
    identifier: int
    nominal_transform: Transform3D
    bounds: SurfaceBounds
    thickness: float = 0.
    surface: Surface = field(init=False, repr=False)

    def __post_init__(self):
        self.surface = Surface(self.nominal_transform, self.bounds, self.identifier)

    def transform(self, gctx=None) -> Transform3D:
        return self.surface.transform(gctx)

    def center(self, gctx=None) -> np.ndarray:
        return self.surface.center(gctx)

    def normal(self, gctx=None) -> np.ndarray:
        return self.surface.normal(gctx)
