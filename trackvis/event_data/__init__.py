"""Track parameter estimates: the renderer interface and bound parameters."""

from trackvis.event_data._parameters import (
    ParIndex,
    N_BOUND_PARAMETERS,
    TrackParameters,
    BoundParameters,
)

__all__ = ['ParIndex', 'N_BOUND_PARAMETERS', 'TrackParameters', 'BoundParameters']
