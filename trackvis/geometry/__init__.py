"""
Geometry primitives: transforms, convex meshes, surfaces and detector elements.

Submodules
----------
_transform  : Transform3D and direction angle helpers (phi, theta)
_polyhedron : convex_face_mesh and the Polyhedron value type
_surface    : bounds variants, Surface, DetectorElement
"""

from trackvis.geometry._transform import (
    Transform3D,
    phi,
    theta,
    make_curvilinear_unit_vectors,
)
from trackvis.geometry._polyhedron import Polyhedron, convex_face_mesh
from trackvis.geometry._surface import (
    RectangleBounds,
    RadialBounds,
    Surface,
    DetectorElement,
    bounds_from_dict,
    bounds_polyhedron_methods,
)

__all__ = [
    'Transform3D', 'phi', 'theta', 'make_curvilinear_unit_vectors',
    'Polyhedron', 'convex_face_mesh',
    'RectangleBounds', 'RadialBounds', 'Surface', 'DetectorElement',
    'bounds_from_dict', 'bounds_polyhedron_methods',
]
