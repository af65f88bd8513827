"""ASCII PLY output with per-vertex colors, a ``face`` and an ``edge`` element."""

import logging
from pathlib import Path

from trackvis.visualization._sink import VisualizationSink, as_color, check_mesh, face_edges

logger = logging.getLogger(__name__)


class PlyVisualization(VisualizationSink):
    """Accumulates geometry and writes it as ASCII PLY.

    Filled face sets go to the ``face`` element, wireframe face sets to the
    ``edge`` element (with the edge color).
    """

    def __init__(self, precision: int = 4):
        self.precision = precision
        self.clear()

    def faces(self, vertices, faces, filled: bool = True, color=(20, 120, 20)):
        verts, face_list = check_mesh(vertices, faces)
        rgb = as_color(color)
        offset = len(self._vertices)
        self._vertices.extend((tuple(v), rgb) for v in verts)
        if filled:
            self._faces.extend(tuple(i + offset for i in f) for f in face_list)
        else:
            self._edges.extend((a + offset, b + offset, rgb) for a, b in face_edges(face_list))

    def clear(self) -> None:
        self._vertices = []
        self._faces = []
        self._edges = []

    def to_string(self) -> str:
        lines = [
            'ply',
            'format ascii 1.0',
            f'element vertex {len(self._vertices)}',
            'property float x',
            'property float y',
            'property float z',
            'property uchar red',
            'property uchar green',
            'property uchar blue',
            f'element face {len(self._faces)}',
            'property list uchar int vertex_index',
            f'element edge {len(self._edges)}',
            'property int vertex1',
            'property int vertex2',
            'property uchar red',
            'property uchar green',
            'property uchar blue',
            'end_header',
        ]
        fmt = f'{{:.{self.precision}f}}'
        for v, rgb in self._vertices:
            lines.append(' '.join(fmt.format(x) for x in v) + ' {} {} {}'.format(*rgb))
        for f in self._faces:
            lines.append(f'{len(f)} ' + ' '.join(str(i) for i in f))
        for a, b, rgb in self._edges:
            lines.append(f'{a} {b} ' + '{} {} {}'.format(*rgb))
        return '\n'.join(lines) + '\n'

    def write(self, path) -> str:
        path = Path(path)
        if path.suffix != '.ply':
            path = path.with_suffix('.ply')
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            f.write(self.to_string())
        logger.info("Wrote %d vertices, %d faces, %d edges to %s",
                    len(self._vertices), len(self._faces), len(self._edges), path)
        return str(path)
