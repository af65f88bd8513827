"""
Visualization sink interface, an in-memory recording sink and the sink registry.

A sink receives ready-made geometry (vertices, faces, fill mode, color) and
does the actual drawing or file output. Drawing helpers in this package never
depend on a concrete sink.

Usage
-----
    from trackvis.visualization import make_sink

    sink = make_sink('recording')
    draw_bound_parameters(sink, pars)
    [call.filled for call in sink.calls]
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from trackvis._registry import MethodRegistry

logger = logging.getLogger(__name__)

sink_methods = MethodRegistry("sink")


def as_color(color) -> tuple:
    """Validate an RGB triple with components in [0, 255]."""
    rgb = tuple(int(c) for c in color)
    if len(rgb) != 3 or any(c < 0 or c > 255 for c in rgb):
        raise ValueError(f"Color must be three integers in [0, 255], got {color!r}")
    return rgb


def check_mesh(vertices, faces):
    """Return (vertices as (n, 3) float array, faces as tuples), validating indices."""
    verts = np.asarray(vertices, dtype=np.float64)
    if verts.ndim != 2 or verts.shape[1] != 3:
        raise ValueError(f"vertices must have shape (n, 3), got {verts.shape}")
    face_list = [tuple(int(i) for i in f) for f in faces]
    n = len(verts)
    for f in face_list:
        if len(f) < 2 or min(f) < 0 or max(f) >= n:
            raise ValueError(f"Face {f} does not index into {n} vertices")
    return verts, face_list


def face_edges(faces) -> list:
    """Unique undirected edges of a face list, in first-seen order."""
    seen = set()
    edges = []
    for f in faces:
        for a, b in zip(f, f[1:] + f[:1]):
            key = (min(a, b), max(a, b))
            if a != b and key not in seen:
                seen.add(key)
                edges.append(key)
    return edges


@dataclass
class DrawCall:
    """One ``faces`` request as seen by a sink."""
    vertices: np.ndarray
    faces: list
    filled: bool
    color: tuple


class VisualizationSink(ABC):
    """Abstract rendering sink."""

    @abstractmethod
    def faces(self, vertices, faces, filled: bool = True, color=(20, 120, 20)):
        """Draw a face set, filled or as wireframe edges."""

    @abstractmethod
    def clear(self) -> None:
        """Drop everything drawn so far."""

    def write(self, path):
        raise NotImplementedError(f"{type(self).__name__} does not write files")


class RecordingSink(VisualizationSink):
    """Keeps every draw request in memory (``self.calls``)."""

    def __init__(self):
        self.calls: list[DrawCall] = []

    def faces(self, vertices, faces, filled: bool = True, color=(20, 120, 20)):
        verts, face_list = check_mesh(vertices, faces)
        call = DrawCall(verts.copy(), face_list, bool(filled), as_color(color))
        self.calls.append(call)
        return call

    def clear(self) -> None:
        self.calls = []

    @property
    def n_filled(self) -> int:
        return sum(1 for c in self.calls if c.filled)

    @property
    def n_wireframe(self) -> int:
        return sum(1 for c in self.calls if not c.filled)


def make_sink(name: str, **kwargs) -> VisualizationSink:
    """Instantiate a registered sink by name."""
    sink = sink_methods.create(name, **kwargs)
    logger.debug("Created %s sink", name)
    return sink


sink_methods.register('recording', RecordingSink)
