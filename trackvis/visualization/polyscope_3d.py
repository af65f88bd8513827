"""Polyscope-based 3D sink (optional dependency).

Raises an ImportError with an install hint if polyscope is not installed.

Usage
-----
    from trackvis.visualization.polyscope_3d import PolyscopeVisualization

    sink = PolyscopeVisualization(prefix='event0')
    draw_bound_parameters(sink, pars)
    sink.show()
"""

import numpy as np

from trackvis.visualization._sink import VisualizationSink, as_color, check_mesh, face_edges


def _check_polyscope():
    try:
        import polyscope
        return polyscope
    except ImportError:
        raise ImportError(
            "polyscope is required for the polyscope sink. "
            "Install it with: pip install polyscope"
        )


class PolyscopeVisualization(VisualizationSink):
    """Registers filled face sets as surface meshes, wireframes as curve networks.

    Parameters
    ----------
    prefix : str
        Prefix for the structure names registered in polyscope.
    edge_radius : float
        Relative radius of curve network edges.
    """

    def __init__(self, prefix: str = 'trackvis', edge_radius: float = 0.002):
        self._ps = _check_polyscope()
        self._ps.init()
        self.prefix = prefix
        self.edge_radius = edge_radius
        self._names: list[str] = []

    def faces(self, vertices, faces, filled: bool = True, color=(20, 120, 20)):
        verts, face_list = check_mesh(vertices, faces)
        rgb = tuple(c / 255. for c in as_color(color))
        name = f'{self.prefix}_{len(self._names)}'
        if filled:
            # uniform polygon sizes go in as an (m, k) array
            if len({len(f) for f in face_list}) == 1:
                face_list = np.array(face_list, dtype=np.int64)
            structure = self._ps.register_surface_mesh(name, verts, face_list, color=rgb)
        else:
            edges = np.array(face_edges(face_list), dtype=np.int64)
            structure = self._ps.register_curve_network(name, verts, edges, color=rgb,
                                                        radius=self.edge_radius)
        self._names.append(name)
        return structure

    def clear(self) -> None:
        for name in self._names:
            if self._ps.has_surface_mesh(name):
                self._ps.remove_surface_mesh(name)
            elif self._ps.has_curve_network(name):
                self._ps.remove_curve_network(name)
        self._names = []

    def write(self, path) -> str:
        self._ps.screenshot(str(path))
        return str(path)

    def show(self) -> None:
        self._ps.show()
