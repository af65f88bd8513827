"""
Drawing of track parameters and their uncertainties.

A track parameter estimate is shown as a momentum arrow, an error ellipse of
the local position covariance in the plane of the reference surface, and an
error cone of the angular (phi, theta) covariance around the direction.

Usage
-----
    from trackvis.visualization import make_sink, draw_bound_parameters

    sink = make_sink('obj')
    draw_bound_parameters(sink, pars, gctx, momentum_scale=10.)
    sink.write('track.obj')
"""

import logging
import math
from collections import namedtuple
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from trackvis.context import GeometryContext
from trackvis.event_data import ParIndex
from trackvis.geometry import Polyhedron, Transform3D, phi, theta
from trackvis.visualization.geometry import draw_arrow_forward, draw_surface

logger = logging.getLogger(__name__)

EigenDecomposition = namedtuple('EigenDecomposition', ['lambda0', 'lambda1', 'theta'])


@dataclass
class EventDataViewConfig:
    """Default drawing options for track parameters.

    Attributes
    ----------
    lseg : int
        Segments of a full ellipse / arrow ring.
    nsigma : tuple of int
        Accepted for multi-contour drawing; only a single contour is drawn.
    momentum_scale, loc_error_scale, angular_error_scale : float
        Length scales of the arrow, the error ellipse and the error cone.
    draw_parameter_surface : bool
        Draw the reference surface as wireframe.
    parameter_color, surface_color : tuple of int
    arrow_shaft_radius, arrow_head_radius, arrow_head_length_scale : float
    out_of_plane : float
        Offset of the error ellipse above its surface.
    cone_fraction : float
        Error cone length relative to the arrow length.
    """
    lseg: int = 72
    nsigma: tuple = (3,)
    momentum_scale: float = 1.
    loc_error_scale: float = 1.
    angular_error_scale: float = 1.
    draw_parameter_surface: bool = True
    parameter_color: tuple = (20, 120, 20)
    surface_color: tuple = (235, 198, 52)
    arrow_shaft_radius: float = 0.025
    arrow_head_radius: float = 0.05
    arrow_head_length_scale: float = 2.
    out_of_plane: float = 0.01
    cone_fraction: float = 0.9


DEFAULT_CONFIG = EventDataViewConfig()


def _check_lseg(lseg: int) -> None:
    if lseg < 3:
        raise ValueError(f"Need at least 3 segments to draw an ellipse, got {lseg}")


def _check_nsigma(nsigma: Sequence[int]) -> None:
    if tuple(nsigma) != DEFAULT_CONFIG.nsigma:
        logger.warning("nsigma=%s requested; multi-sigma contours are not drawn, "
                       "using a single contour", list(nsigma))


# ---------------------------------------------------------------------------
# Covariance decomposition and ellipse points
# ---------------------------------------------------------------------------

def decompose_covariance(covariance) -> EigenDecomposition:
    """Eigenvalues and principal-axis angle of a symmetric 2x2 matrix.

    Parameters
    ----------
    covariance : array_like of shape (2, 2)
        Symmetric matrix; only ``c00``, ``c01`` and ``c11`` are read.

    Returns
    -------
    EigenDecomposition
        ``(lambda0, lambda1, theta)`` with ``theta`` the rotation of the
        principal frame w.r.t. the input frame.
        For ``c01 == 0`` with ``lambda0 == c00`` (axis-aligned or isotropic)
        ``theta`` is 0.
    """
    cov = np.asarray(covariance, dtype=np.float64)
    c00 = float(cov[0, 0])
    c01 = float(cov[0, 1])
    c11 = float(cov[1, 1])

    mean = 0.5 * (c00 + c11)
    radicand = (0.5 * (c00 - c11)) ** 2 + c01 * c01
    # clamp rounding residue
    root = math.sqrt(max(radicand, 0.))

    lambda0 = mean + root
    lambda1 = mean - root
    if c01 == 0. and lambda0 == c00:
        angle = 0.
    else:
        angle = math.atan2(lambda0 - c00, c01)
    return EigenDecomposition(lambda0, lambda1, angle)


def create_ellipse(lambda0: float, lambda1: float, theta: float, lseg: int,
                   out_of_plane: float, lposition=(0., 0.),
                   transform: Optional[Transform3D] = None) -> np.ndarray:
    """Ordered, open loop of points on an ellipse.

    Parameters
    ----------
    lambda0, lambda1 : float
        Squared half axes (variances); negative rounding residue is treated as 0.
    theta : float
        Rotation of the half axes in the local frame.
    lseg : int
        Number of points. Values below 3 give a degenerate loop.
    out_of_plane : float
        Local z coordinate of every point.
    lposition : array_like of length 2
        Local center of the ellipse.
    transform : Transform3D or None
        Local-to-global transform; identity if None.

    Returns
    -------
    ndarray of shape (lseg, 3)
        Points at ``phi_i = -pi + i * 2 pi / lseg`` in increasing order.
    """
    ctheta = math.cos(theta)
    stheta = math.sin(theta)
    l0 = math.sqrt(max(lambda0, 0.))
    l1 = math.sqrt(max(lambda1, 0.))

    phis = -math.pi + np.arange(lseg) * (2 * math.pi / lseg)
    cphi = np.cos(phis)
    sphi = np.sin(phis)
    x = lposition[0] + (l0 * ctheta * cphi - l1 * stheta * sphi)
    y = lposition[1] + (l0 * stheta * cphi + l1 * ctheta * sphi)
    local = np.column_stack([x, y, np.full(lseg, float(out_of_plane))])
    if transform is None:
        return local
    return transform.apply(local)


# ---------------------------------------------------------------------------
# Covariance meshes
# ---------------------------------------------------------------------------

def draw_covariance_cartesian(sink, lposition, covariance, transform: Transform3D,
                              nsigma: Sequence[int] = (3,), loc_error_scale: float = 1.,
                              lseg: int = 72, color=(20, 120, 20),
                              out_of_plane: float = 0.01):
    """Filled error ellipse of a local position covariance.

    The ellipse lies in the plane of *transform*, centered at *lposition* and
    lifted by *out_of_plane* along the local normal.

    Returns
    -------
    Polyhedron
        The drawn mesh (rim points followed by the center).
    """
    _check_lseg(lseg)
    _check_nsigma(nsigma)
    lambda0, lambda1, angle = decompose_covariance(covariance)
    lambda0 *= loc_error_scale
    lambda1 *= loc_error_scale
    logger.debug("Cartesian covariance: lambda0=%g lambda1=%g theta=%g",
                 lambda0, lambda1, angle)

    ellipse = create_ellipse(lambda0, lambda1, angle, lseg, out_of_plane,
                             lposition, transform)
    center = transform.apply([lposition[0], lposition[1], out_of_plane])
    hedron = Polyhedron.from_convex_loop(np.vstack([ellipse, center]), center_last=True)
    hedron.draw(sink, wireframe=False, color=color)
    return hedron


def angular_frame(position, direction, direction_scale: float) -> Transform3D:
    """Frame at ``position + direction_scale * direction`` rotated by the direction angles.

    The rotation is ``Rx(theta) * Rz(phi)`` of the direction's polar and
    azimuthal angles. Its local z axis is in general not the direction (a
    track along +x gets local z along -y), so the cap drawn in this frame is
    not perpendicular to the track.
    """
    anchor = np.asarray(position, dtype=np.float64) + direction_scale * np.asarray(direction)
    return (Transform3D.from_translation(anchor)
            @ Transform3D.from_angle_axis(theta(direction), [1., 0., 0.])
            @ Transform3D.from_angle_axis(phi(direction), [0., 0., 1.]))


def draw_covariance_angular(sink, position, direction, covariance,
                            nsigma: Sequence[int] = (3,), direction_scale: float = 1.,
                            angular_error_scale: float = 1., lseg: int = 72,
                            color=(20, 120, 20)):
    """Error cone of a (phi, theta) covariance around *direction*.

    Draws a filled cap (rim plus anchor) at ``position + direction_scale *
    direction`` and a wireframe cone from the rim to *position*.

    Returns
    -------
    tuple of Polyhedron
        ``(cap, cone)``.
    """
    _check_lseg(lseg)
    _check_nsigma(nsigma)
    position = np.asarray(position, dtype=np.float64)
    direction = np.asarray(direction, dtype=np.float64)
    lambda0, lambda1, angle = decompose_covariance(covariance)

    eplane = angular_frame(position, direction, direction_scale)
    anchor = eplane.translation.copy()

    # Angular spread projected to a transverse size at the anchor distance
    scale = angular_error_scale * direction_scale
    ellipse = create_ellipse(scale * math.tan(lambda0), scale * math.tan(lambda1),
                             angle, lseg, 0., (0., 0.), eplane)
    logger.debug("Angular covariance: lambda0=%g lambda1=%g theta=%g at %s",
                 lambda0, lambda1, angle, anchor)

    cap = Polyhedron.from_convex_loop(np.vstack([ellipse, anchor]), center_last=True)
    cap.draw(sink, wireframe=False, color=color)

    cone = Polyhedron.from_convex_loop(np.vstack([ellipse, position]), center_last=True)
    cone.draw(sink, wireframe=True, color=color)
    return cap, cone


# ---------------------------------------------------------------------------
# Track parameters
# ---------------------------------------------------------------------------

def _parameter_direction(params) -> np.ndarray:
    """Unit direction from the (phi, theta) entries of a bound parameter vector."""
    ph = float(params[ParIndex.PHI])
    th = float(params[ParIndex.THETA])
    return np.array([math.cos(ph) * math.sin(th), math.sin(ph) * math.sin(th), math.cos(th)])


def draw_bound_parameters(sink, parameters, gctx: Optional[GeometryContext] = None,
                          momentum_scale: float = 1., loc_error_scale: float = 1.,
                          angular_error_scale: float = 1.,
                          draw_parameter_surface: bool = True, lseg: int = 72,
                          pcolor=(20, 120, 20), scolor=(235, 198, 52),
                          config: Optional[EventDataViewConfig] = None):
    """Draw a track parameter estimate with its uncertainties.

    Parameters
    ----------
    sink : VisualizationSink
    parameters : TrackParameters
    gctx : GeometryContext or None
        Context for the reference surface placement; the estimate's own
        context if None. The arrow, ellipse and cone are all placed with it.
    momentum_scale : float
        Arrow length per unit momentum. A zero-length arrow is not drawn.
    loc_error_scale, angular_error_scale : float
        Scales of the error ellipse and error cone.
    draw_parameter_surface : bool
        Draw the reference surface (wireframe) first.
    lseg : int
        Segments of the surface outline, the arrow rings and the ellipses.
    pcolor, scolor : tuple of int
        Parameter and surface colors.
    config : EventDataViewConfig or None
        Source of the arrow radii, the ellipse offset, the cone fraction and
        ``nsigma``; the defaults if None.
    """
    _check_lseg(lseg)
    cfg = config if config is not None else DEFAULT_CONFIG
    if gctx is None:
        gctx = parameters.geometry_context()
    if gctx is None:
        gctx = GeometryContext()
    surface = parameters.reference_surface()

    # arrow, ellipse and cone share one placement
    position = np.asarray(parameters.position(gctx), dtype=np.float64)
    momentum = np.asarray(parameters.momentum(), dtype=np.float64)
    p = float(np.linalg.norm(momentum))
    if p > 0.:
        direction = momentum / p
    else:
        direction = _parameter_direction(parameters.parameters())
        logger.debug("Zero momentum, direction taken from phi/theta: %s", direction)

    if draw_parameter_surface:
        draw_surface(sink, surface, gctx, Transform3D.identity(), lseg,
                     wireframe=True, color=scolor)

    draw_arrow_forward(sink, position, position + p * momentum_scale * direction,
                       cfg.arrow_shaft_radius, cfg.arrow_head_radius,
                       cfg.arrow_head_length_scale, lseg, pcolor)

    if parameters.covariance() is None:
        logger.debug("No covariance, drawing momentum arrow only")
        return

    draw_covariance_cartesian(sink, parameters.local_position(),
                              parameters.local_covariance(),
                              surface.transform(gctx), cfg.nsigma,
                              loc_error_scale, lseg, pcolor, cfg.out_of_plane)

    draw_covariance_angular(sink, position, direction,
                            parameters.angular_covariance(), cfg.nsigma,
                            cfg.cone_fraction * p * momentum_scale,
                            angular_error_scale, lseg, pcolor)


def draw_with_config(sink, parameters, gctx: Optional[GeometryContext] = None,
                     config: Optional[EventDataViewConfig] = None):
    """``draw_bound_parameters`` with every option taken from an EventDataViewConfig."""
    config = config if config is not None else DEFAULT_CONFIG
    return draw_bound_parameters(
        sink, parameters, gctx,
        momentum_scale=config.momentum_scale,
        loc_error_scale=config.loc_error_scale,
        angular_error_scale=config.angular_error_scale,
        draw_parameter_surface=config.draw_parameter_surface,
        lseg=config.lseg,
        pcolor=config.parameter_color,
        scolor=config.surface_color,
        config=config,
    )
