"""
Track parameter estimates consumed by the event-data renderer.

``TrackParameters`` is the interface the renderer relies on; the covariance
block layout is part of that interface:

    parameter vector : (loc0, loc1, phi, theta, q/p, t)   see ``ParIndex``
    covariance[0:2, 0:2] : local position covariance (loc0, loc1)
    covariance[2:4, 2:4] : angular covariance (phi, theta)

Usage
-----
    from trackvis.event_data import BoundParameters

    pars = BoundParameters(surface, [1., 2., 0.1, 1.4, 1. / 10., 0.],
                           covariance=np.diag([0.01, 0.04, 1e-4, 1e-4, 1e-6, 1.]))
    pars.position(), pars.momentum(), pars.local_covariance()
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Optional

import numpy as np

from trackvis.context import GeometryContext


class ParIndex(IntEnum):
    """Indices into the bound parameter vector."""
    LOC_0 = 0
    LOC_1 = 1
    PHI = 2
    THETA = 3
    QOP = 4
    TIME = 5


N_BOUND_PARAMETERS = len(ParIndex)


class TrackParameters(ABC):
    """Read-only view of a single track parameter estimate."""

    @abstractmethod
    def position(self, gctx: Optional[GeometryContext] = None) -> np.ndarray:
        """Global 3D position, placed with *gctx* when one is given."""

    @abstractmethod
    def momentum(self) -> np.ndarray:
        """Global 3D momentum vector (direction times magnitude)."""

    @abstractmethod
    def covariance(self) -> Optional[np.ndarray]:
        """Square covariance matrix (at least 4x4), or None if absent."""

    @abstractmethod
    def reference_surface(self):
        """Surface the parameters are expressed on."""

    @abstractmethod
    def parameters(self) -> np.ndarray:
        """Bound parameter vector, indexed by ``ParIndex``."""

    def geometry_context(self) -> Optional[GeometryContext]:
        """Context the estimate was expressed in, or None."""
        return None

    def local_position(self) -> np.ndarray:
        p = self.parameters()
        return np.asarray(p[ParIndex.LOC_0:ParIndex.LOC_1 + 1], dtype=np.float64)

    def local_covariance(self) -> Optional[np.ndarray]:
        """The (loc0, loc1) covariance block, or None."""
        cov = self.covariance()
        if cov is None:
            return None
        return cov[ParIndex.LOC_0:ParIndex.LOC_1 + 1, ParIndex.LOC_0:ParIndex.LOC_1 + 1]

    def angular_covariance(self) -> Optional[np.ndarray]:
        """The (phi, theta) covariance block, or None."""
        cov = self.covariance()
        if cov is None:
            return None
        return cov[ParIndex.PHI:ParIndex.THETA + 1, ParIndex.PHI:ParIndex.THETA + 1]


class BoundParameters(TrackParameters):
    """Track parameters bound to a reference surface.

    Parameters
    ----------
    surface : Surface
        Reference surface; local coordinates are Cartesian in its plane.
    parameters : array_like of length 6
        ``(loc0, loc1, phi, theta, q/p, t)``.
    covariance : array_like of shape (6, 6) or None
        Optional covariance of the parameter vector.
    charge : float
        Particle charge used to turn q/p into a momentum magnitude.
    gctx : GeometryContext or None
        Geometry context for the local-to-global transformation.
    """

    def __init__(self, surface, parameters, covariance=None, charge: float = 1.,
                 gctx: Optional[GeometryContext] = None):
        params = np.array(parameters, dtype=np.float64)
        if params.shape != (N_BOUND_PARAMETERS,):
            raise ValueError(
                f"Expected {N_BOUND_PARAMETERS} bound parameters, got shape {params.shape}"
            )
        if params[ParIndex.QOP] == 0.:
            raise ValueError("q/p must be non-zero")
        if covariance is not None:
            covariance = np.array(covariance, dtype=np.float64)
            if covariance.shape != (N_BOUND_PARAMETERS, N_BOUND_PARAMETERS):
                raise ValueError(
                    f"Covariance must be ({N_BOUND_PARAMETERS}, {N_BOUND_PARAMETERS}), "
                    f"got {covariance.shape}"
                )
        self._surface = surface
        self._parameters = params
        self._covariance = covariance
        self.charge = float(charge)
        self.gctx = gctx if gctx is not None else GeometryContext()

    def position(self, gctx: Optional[GeometryContext] = None) -> np.ndarray:
        gctx = gctx if gctx is not None else self.gctx
        return self._surface.local_to_global(gctx, self.local_position())

    def geometry_context(self) -> GeometryContext:
        return self.gctx

    def direction(self) -> np.ndarray:
        ph = self._parameters[ParIndex.PHI]
        th = self._parameters[ParIndex.THETA]
        return np.array([np.cos(ph) * np.sin(th), np.sin(ph) * np.sin(th), np.cos(th)])

    def absolute_momentum(self) -> float:
        q = self.charge if self.charge != 0. else 1.
        return abs(q / self._parameters[ParIndex.QOP])

    def momentum(self) -> np.ndarray:
        return self.absolute_momentum() * self.direction()

    def covariance(self) -> Optional[np.ndarray]:
        return self._covariance

    def reference_surface(self):
        return self._surface

    def parameters(self) -> np.ndarray:
        return self._parameters

    def __repr__(self):
        return (f"BoundParameters(parameters={self._parameters.tolist()}, "
                f"has_covariance={self._covariance is not None})")
