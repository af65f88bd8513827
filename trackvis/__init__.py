"""Visualization of track parameters and their uncertainties.

Subpackages
-----------
geometry      : transforms, convex meshes, surfaces, detector elements
event_data    : track parameter interface and bound parameters
visualization : sinks and drawing helpers (error ellipse, error cone, arrows)
data          : JSON save/load of events
"""

from trackvis.context import GeometryContext, RunContext
from trackvis.event_data import BoundParameters, ParIndex, TrackParameters
from trackvis.visualization import (
    decompose_covariance,
    create_ellipse,
    draw_covariance_cartesian,
    draw_covariance_angular,
    draw_bound_parameters,
    make_sink,
)

__version__ = '0.1.0'

__all__ = [
    'GeometryContext', 'RunContext',
    'BoundParameters', 'ParIndex', 'TrackParameters',
    'decompose_covariance', 'create_ellipse',
    'draw_covariance_cartesian', 'draw_covariance_angular',
    'draw_bound_parameters', 'make_sink',
]
