"""
Convex face meshes and the polyhedron value type handed to visualization sinks.

Usage
-----
    from trackvis.geometry import Polyhedron, convex_face_mesh

    loop = np.vstack([rim_points, center])
    faces, triangles = convex_face_mesh(loop, center_last=True)
    Polyhedron(loop, faces, triangles).draw(sink, wireframe=False, color=(20, 120, 20))
"""

from dataclasses import dataclass, field

import numpy as np


def convex_face_mesh(vertices, center_last: bool = False):
    """Face list and fan triangulation for a convex, star-shaped point loop.

    Parameters
    ----------
    vertices : array_like of shape (n, 3)
        The rim points in loop order, optionally followed by a center point.
    center_last : bool
        If True the last vertex is the fan anchor and not part of the rim.

    Returns
    -------
    faces : list of tuple
        A single polygon face over the rim vertices.
    triangular_mesh : list of tuple
        Fan triangles. Anchored at the center (with a closing triangle) when
        ``center_last`` is set, otherwise anchored at the first rim vertex.
    """
    n = len(vertices)
    offset = 1 if center_last else 0
    faces = [tuple(range(n - offset))]

    anchor = n - 1 if center_last else 0
    triangular_mesh = [(anchor, i - 1, i) for i in range(2 - offset, n - offset)]
    if center_last:
        triangular_mesh.append((anchor, n - 2, 0))
    return faces, triangular_mesh


@dataclass
class Polyhedron:
    """Vertices plus polygon faces and their triangulation.

    Attributes
    ----------
    vertices : ndarray of shape (n, 3)
    faces : list of tuple
        Polygon faces (indices into vertices).
    triangular_mesh : list of tuple
        Triangles covering the same area as ``faces``.
    """
    vertices: np.ndarray
    faces: list = field(default_factory=list)
    triangular_mesh: list = field(default_factory=list)

    def __post_init__(self):
        self.vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)

    @classmethod
    def from_convex_loop(cls, vertices, center_last: bool = False) -> 'Polyhedron':
        faces, triangles = convex_face_mesh(vertices, center_last)
        return cls(vertices, faces, triangles)

    def merge(self, other: 'Polyhedron') -> 'Polyhedron':
        """Concatenate two polyhedra into one vertex/face set."""
        shift = len(self.vertices)

        def _shifted(face_list):
            return [tuple(i + shift for i in f) for f in face_list]

        return Polyhedron(
            np.vstack([self.vertices, other.vertices]),
            self.faces + _shifted(other.faces),
            self.triangular_mesh + _shifted(other.triangular_mesh),
        )

    def extent(self) -> np.ndarray:
        """Axis-aligned bounding box as ``[[xmin, ymin, zmin], [xmax, ymax, zmax]]``."""
        return np.array([self.vertices.min(axis=0), self.vertices.max(axis=0)])

    def draw(self, sink, wireframe: bool = False, color=(20, 120, 20),
             triangulate: bool = True):
        """Hand the mesh to *sink*, filled or as edges only.

        The fan triangles are sent by default; with ``triangulate=False`` the
        polygon faces are, so a wireframe shows the outline only.
        """
        faces = self.triangular_mesh if triangulate else self.faces
        return sink.faces(self.vertices, faces, filled=not wireframe, color=color)
