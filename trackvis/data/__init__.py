"""Data handling: save/load track parameters with their reference surfaces."""

from trackvis.data._io import save_parameters, load_parameters

__all__ = ['save_parameters', 'load_parameters']
