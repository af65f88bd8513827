"""Matplotlib sink: face sets as ``Poly3DCollection`` / ``Line3DCollection``."""

import numpy as np

from trackvis.visualization._sink import VisualizationSink, as_color, check_mesh, face_edges


class MatplotlibVisualization(VisualizationSink):
    """Draws into a 3D matplotlib axes.

    Parameters
    ----------
    ax : mpl_toolkits.mplot3d.Axes3D or None
        If None, a new 3D figure is created.
    alpha : float
        Face transparency for filled face sets.
    linewidth : float
        Line width for wireframe face sets.
    """

    def __init__(self, ax=None, alpha: float = 0.6, linewidth: float = 0.5):
        import matplotlib.pyplot as plt

        if ax is None:
            fig = plt.figure()
            ax = fig.add_subplot(111, projection='3d')
        self.ax = ax
        self.fig = ax.get_figure()
        self.alpha = alpha
        self.linewidth = linewidth
        self._lo = None
        self._hi = None

    def faces(self, vertices, faces, filled: bool = True, color=(20, 120, 20)):
        from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection

        verts, face_list = check_mesh(vertices, faces)
        rgb = np.array(as_color(color)) / 255.
        if filled:
            polys = [verts[list(f)] for f in face_list]
            artist = Poly3DCollection(polys, facecolors=rgb, edgecolors=rgb,
                                      alpha=self.alpha, linewidths=0.)
        else:
            segments = [verts[[a, b]] for a, b in face_edges(face_list)]
            artist = Line3DCollection(segments, colors=rgb, linewidths=self.linewidth)
        self.ax.add_collection3d(artist)
        self._update_limits(verts)
        return artist

    def _update_limits(self, verts):
        lo, hi = verts.min(axis=0), verts.max(axis=0)
        self._lo = lo if self._lo is None else np.minimum(self._lo, lo)
        self._hi = hi if self._hi is None else np.maximum(self._hi, hi)
        # Equal aspect: cube around the data
        center = 0.5 * (self._lo + self._hi)
        half = 0.5 * max(float(np.max(self._hi - self._lo)), 1e-9)
        self.ax.set_xlim(center[0] - half, center[0] + half)
        self.ax.set_ylim(center[1] - half, center[1] + half)
        self.ax.set_zlim(center[2] - half, center[2] + half)

    def clear(self) -> None:
        self.ax.cla()
        self._lo = None
        self._hi = None

    def write(self, path) -> str:
        self.ax.set_xlabel('x')
        self.ax.set_ylabel('y')
        self.ax.set_zlabel('z')
        self.fig.savefig(path)
        return str(path)
