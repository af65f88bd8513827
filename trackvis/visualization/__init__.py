"""Visualization sinks and drawing helpers.

Submodules
----------
_sink         : VisualizationSink interface, RecordingSink, sink registry
obj           : Wavefront OBJ/MTL writer
ply           : ASCII PLY writer
matplotlib_3d : matplotlib 3D axes sink
polyscope_3d  : polyscope sink (optional)
geometry      : surface and arrow drawing
event_data    : covariance ellipse/cone and track parameter drawing
"""

from trackvis.visualization._sink import (
    VisualizationSink,
    RecordingSink,
    DrawCall,
    make_sink,
    sink_methods,
)
from trackvis.visualization.obj import ObjVisualization
from trackvis.visualization.ply import PlyVisualization
from trackvis.visualization.matplotlib_3d import MatplotlibVisualization
from trackvis.visualization.polyscope_3d import PolyscopeVisualization
from trackvis.visualization.geometry import (
    draw_surface,
    draw_arrow_forward,
    arrow_polyhedron,
)
from trackvis.visualization.event_data import (
    EigenDecomposition,
    EventDataViewConfig,
    decompose_covariance,
    create_ellipse,
    draw_covariance_cartesian,
    draw_covariance_angular,
    draw_bound_parameters,
    draw_with_config,
)

sink_methods.register('obj', ObjVisualization)
sink_methods.register('ply', PlyVisualization)
sink_methods.register('matplotlib', MatplotlibVisualization)
sink_methods.register('polyscope', PolyscopeVisualization)

__all__ = [
    'VisualizationSink', 'RecordingSink', 'DrawCall', 'make_sink', 'sink_methods',
    'ObjVisualization', 'PlyVisualization', 'MatplotlibVisualization',
    'PolyscopeVisualization',
    'draw_surface', 'draw_arrow_forward', 'arrow_polyhedron',
    'EigenDecomposition', 'EventDataViewConfig', 'decompose_covariance',
    'create_ellipse', 'draw_covariance_cartesian', 'draw_covariance_angular',
    'draw_bound_parameters', 'draw_with_config',
]
