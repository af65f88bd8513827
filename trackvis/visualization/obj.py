"""
Wavefront OBJ output (with a companion MTL file for colors).

Filled face sets become ``f`` records, wireframe face sets become ``l``
records over their unique edges. Each distinct color gets one material.

Usage
-----
    from trackvis.visualization.obj import ObjVisualization

    obj = ObjVisualization()
    draw_bound_parameters(obj, pars)
    obj.write('track.obj')   # also writes track.mtl
"""

import logging
from pathlib import Path

from trackvis.visualization._sink import VisualizationSink, as_color, check_mesh, face_edges

logger = logging.getLogger(__name__)


def _material_name(color) -> str:
    return 'material_{}_{}_{}'.format(*color)


class ObjVisualization(VisualizationSink):
    """Accumulates geometry and writes it as OBJ/MTL.

    Parameters
    ----------
    precision : int
        Number of decimals for vertex coordinates.
    """

    def __init__(self, precision: int = 4):
        self.precision = precision
        self.clear()

    def faces(self, vertices, faces, filled: bool = True, color=(20, 120, 20)):
        verts, face_list = check_mesh(vertices, faces)
        rgb = as_color(color)
        offset = len(self._vertices)
        self._vertices.extend(tuple(v) for v in verts)
        if filled:
            records = [tuple(i + offset for i in f) for f in face_list]
        else:
            records = [(a + offset, b + offset) for a, b in face_edges(face_list)]
        self._groups.append((rgb, filled, records))

    def clear(self) -> None:
        self._vertices = []
        self._groups = []

    def to_string(self, mtl_name: str = None) -> str:
        """OBJ text of everything drawn so far (indices are 1-based)."""
        lines = []
        if mtl_name is not None:
            lines.append(f'mtllib {mtl_name}')
        fmt = f'{{:.{self.precision}f}}'
        for v in self._vertices:
            lines.append('v ' + ' '.join(fmt.format(x) for x in v))
        for rgb, filled, records in self._groups:
            lines.append(f'usemtl {_material_name(rgb)}')
            tag = 'f' if filled else 'l'
            for rec in records:
                lines.append(tag + ' ' + ' '.join(str(i + 1) for i in rec))
        return '\n'.join(lines) + '\n'

    def materials_string(self) -> str:
        lines = []
        seen = set()
        for rgb, _, _ in self._groups:
            if rgb in seen:
                continue
            seen.add(rgb)
            lines.append(f'newmtl {_material_name(rgb)}')
            lines.append('Kd ' + ' '.join(f'{c / 255.:.4f}' for c in rgb))
        return '\n'.join(lines) + '\n'

    def write(self, path) -> str:
        """Write ``<path>.obj`` and ``<path>.mtl``; returns the OBJ path."""
        path = Path(path)
        if path.suffix != '.obj':
            path = path.with_suffix('.obj')
        path.parent.mkdir(parents=True, exist_ok=True)
        mtl_path = path.with_suffix('.mtl')
        with open(mtl_path, 'w') as f:
            f.write(self.materials_string())
        with open(path, 'w') as f:
            f.write(self.to_string(mtl_name=mtl_path.name))
        logger.info("Wrote %d vertices in %d groups to %s",
                    len(self._vertices), len(self._groups), path)
        return str(path)
