"""Save and load track parameters (with their reference surfaces) as JSON.

The format stores a surface table (bounds, placement matrix, identifier) and a
list of events; each event is a list of bound parameter sets referring to a
surface by its table index.

Usage
-----
    from trackvis.data import save_parameters, load_parameters

    save_parameters([[pars0, pars1], [pars2]], path='events.json')
    events, meta = load_parameters('events.json')
"""

import json
import logging
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from trackvis.event_data import BoundParameters
from trackvis.geometry import Surface, Transform3D, bounds_from_dict

logger = logging.getLogger(__name__)

FORMAT = 'trackvis_parameters_v1'


def _surface_record(surface) -> dict:
    return {
        'identifier': surface.identifier,
        'bounds': surface.bounds.to_dict(),
        'transform': surface.transform().matrix.tolist(),
    }


def save_parameters(
    events: Sequence[Sequence[BoundParameters]],
    path: str = 'parameters.json',
    extra_meta: Optional[dict] = None,
) -> str:
    """Serialize events of bound parameters to a JSON file.

    Surfaces shared between parameter sets are stored once. Nominal surface
    placements are written; alignment contexts are not persisted.

    Parameters
    ----------
    events : sequence of sequences of BoundParameters
    path : str or Path
        Output file path.
    extra_meta : dict or None
        Additional metadata to store.

    Returns
    -------
    str
        The path written to.
    """
    surfaces = []
    surface_index = {}
    out_events = []
    for event in events:
        out_event = []
        for pars in event:
            surface = pars.reference_surface()
            if id(surface) not in surface_index:
                surface_index[id(surface)] = len(surfaces)
                surfaces.append(_surface_record(surface))
            cov = pars.covariance()
            out_event.append({
                'surface': surface_index[id(surface)],
                'parameters': pars.parameters().tolist(),
                'covariance': None if cov is None else cov.tolist(),
                'charge': pars.charge,
            })
        out_events.append(out_event)

    data = {
        'format': FORMAT,
        'n_events': len(out_events),
        'surfaces': surfaces,
        'events': out_events,
    }
    if extra_meta:
        data['meta'] = extra_meta

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info("Saved %d events with %d surfaces to %s", len(out_events), len(surfaces), path)
    return str(path)


def load_parameters(path: str) -> tuple:
    """Load events of bound parameters from a JSON file.

    Parameters
    ----------
    path : str or Path

    Returns
    -------
    events : list of list of BoundParameters
    meta : dict
        ``n_events``, ``surfaces`` (the reconstructed Surface list) and any
        stored ``meta`` extras.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Parameter file not found: {path}")
    with open(path) as f:
        data = json.load(f)

    if data.get('format') != FORMAT:
        raise ValueError(f"Unsupported parameter file format: {data.get('format')!r}")

    surfaces = [
        Surface(Transform3D(np.array(rec['transform'])),
                bounds_from_dict(rec['bounds']),
                rec.get('identifier'))
        for rec in data.get('surfaces', [])
    ]

    events = []
    for event in data.get('events', []):
        pars_list = []
        for rec in event:
            idx = rec['surface']
            if not 0 <= idx < len(surfaces):
                raise ValueError(f"Parameter record refers to unknown surface {idx}")
            pars_list.append(BoundParameters(
                surfaces[idx],
                rec['parameters'],
                covariance=rec.get('covariance'),
                charge=rec.get('charge', 1.),
            ))
        events.append(pars_list)

    meta = {'n_events': len(events), 'surfaces': surfaces}
    meta.update(data.get('meta', {}))
    logger.debug("Loaded %d events from %s", len(events), path)
    return events, meta
