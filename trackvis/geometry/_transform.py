"""
Affine 3D transforms (rotation + translation) stored as 4x4 matrices.

Usage
-----
    from trackvis.geometry import Transform3D

    t = Transform3D.from_translation([0., 0., 1.]) @ Transform3D.from_angle_axis(np.pi / 2, [1., 0., 0.])
    pts = t.apply(np.array([[1., 0., 0.], [0., 1., 0.]]))
"""

import numpy as np
from scipy.spatial.transform import Rotation


class Transform3D:
    """Rigid local-to-global transform.

    Parameters
    ----------
    matrix : array_like of shape (4, 4) or None
        Homogeneous matrix; identity if None.
    """

    def __init__(self, matrix=None):
        if matrix is None:
            matrix = np.eye(4)
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"Transform3D needs a (4, 4) matrix, got {matrix.shape}")
        self.matrix = matrix

    @classmethod
    def identity(cls) -> 'Transform3D':
        return cls()

    @classmethod
    def from_translation(cls, translation) -> 'Transform3D':
        m = np.eye(4)
        m[:3, 3] = np.asarray(translation, dtype=np.float64)
        return cls(m)

    @classmethod
    def from_rotation(cls, rotation, translation=(0., 0., 0.)) -> 'Transform3D':
        """Build from a 3x3 rotation matrix and an optional translation."""
        rotation = np.asarray(rotation, dtype=np.float64)
        if rotation.shape != (3, 3):
            raise ValueError(f"rotation must be (3, 3), got {rotation.shape}")
        m = np.eye(4)
        m[:3, :3] = rotation
        m[:3, 3] = np.asarray(translation, dtype=np.float64)
        return cls(m)

    @classmethod
    def from_angle_axis(cls, angle: float, axis) -> 'Transform3D':
        """Rotation by *angle* (radians) about *axis* (right-handed)."""
        axis = np.asarray(axis, dtype=np.float64)
        axis = axis / np.linalg.norm(axis)
        rot = Rotation.from_rotvec(angle * axis).as_matrix()
        return cls.from_rotation(rot)

    @property
    def rotation(self) -> np.ndarray:
        return self.matrix[:3, :3]

    @property
    def translation(self) -> np.ndarray:
        return self.matrix[:3, 3]

    def __matmul__(self, other: 'Transform3D') -> 'Transform3D':
        return Transform3D(self.matrix @ other.matrix)

    def inverse(self) -> 'Transform3D':
        rt = self.rotation.T
        return Transform3D.from_rotation(rt, -rt @ self.translation)

    def apply(self, points) -> np.ndarray:
        """Map a point ``(3,)`` or points ``(N, 3)`` to the target frame."""
        points = np.asarray(points, dtype=np.float64)
        return points @ self.rotation.T + self.translation

    def apply_vector(self, vectors) -> np.ndarray:
        """Rotate direction vector(s), ignoring the translation."""
        vectors = np.asarray(vectors, dtype=np.float64)
        return vectors @ self.rotation.T

    def __repr__(self):
        return f"Transform3D(translation={self.translation.tolist()})"


def phi(vector) -> float:
    """Azimuthal angle of a 3D vector."""
    return float(np.arctan2(vector[1], vector[0]))


def theta(vector) -> float:
    """Polar angle of a 3D vector, measured from the z-axis."""
    return float(np.arctan2(np.hypot(vector[0], vector[1]), vector[2]))


def make_curvilinear_unit_vectors(direction):
    """Return two unit vectors (u, v) spanning the plane normal to *direction*.

    ``u`` is perpendicular to the global z-axis unless *direction* is parallel
    to it, in which case the global x-axis is used.
    """
    direction = np.asarray(direction, dtype=np.float64)
    if np.hypot(direction[0], direction[1]) < 1e-12:
        u = np.array([1., 0., 0.])
    else:
        u = np.array([-direction[1], direction[0], 0.])
        u = u / np.linalg.norm(u)
    v = np.cross(direction, u)
    return u, v
