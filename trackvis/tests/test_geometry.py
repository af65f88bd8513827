"""Tests for trackvis.geometry (transforms, convex meshes, surfaces) and arrows."""

import numpy as np
import numpy.testing as npt
import pytest


# Transform3D

class TestTransform3D:
    def test_identity(self):
        from trackvis.geometry import Transform3D
        pts = np.array([[1.0, 2.0, 3.0], [-1.0, 0.0, 5.0]])
        npt.assert_array_equal(Transform3D.identity().apply(pts), pts)

    def test_translation(self):
        from trackvis.geometry import Transform3D
        t = Transform3D.from_translation([1.0, -2.0, 0.5])
        npt.assert_allclose(t.apply([0.0, 0.0, 0.0]), [1.0, -2.0, 0.5])
        npt.assert_allclose(t.apply_vector([1.0, 0.0, 0.0]), [1.0, 0.0, 0.0])

    def test_angle_axis(self):
        from trackvis.geometry import Transform3D
        rz = Transform3D.from_angle_axis(np.pi / 2, [0.0, 0.0, 1.0])
        npt.assert_allclose(rz.apply([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-15)
        rx = Transform3D.from_angle_axis(np.pi / 2, [2.0, 0.0, 0.0])
        npt.assert_allclose(rx.apply([0.0, 0.0, 1.0]), [0.0, -1.0, 0.0], atol=1e-15)

    def test_composition_order(self):
        from trackvis.geometry import Transform3D
        t = Transform3D.from_translation([0.0, 0.0, 5.0])
        r = Transform3D.from_angle_axis(np.pi / 2, [0.0, 0.0, 1.0])
        # rotate first, then translate
        npt.assert_allclose((t @ r).apply([1.0, 0.0, 0.0]), [0.0, 1.0, 5.0], atol=1e-15)

    def test_inverse(self):
        from trackvis.geometry import Transform3D
        t = (Transform3D.from_translation([1.0, 2.0, 3.0])
             @ Transform3D.from_angle_axis(0.7, [1.0, 1.0, 0.0]))
        pts = np.array([[0.1, 0.2, 0.3], [4.0, -5.0, 6.0]])
        npt.assert_allclose(t.inverse().apply(t.apply(pts)), pts, atol=1e-12)

    def test_bad_shapes(self):
        from trackvis.geometry import Transform3D
        with pytest.raises(ValueError):
            Transform3D(np.eye(3))
        with pytest.raises(ValueError):
            Transform3D.from_rotation(np.eye(4))

    def test_direction_angles(self):
        from trackvis.geometry import phi, theta
        assert theta([0.0, 0.0, 1.0]) == 0.0
        npt.assert_allclose(theta([1.0, 0.0, 0.0]), np.pi / 2)
        npt.assert_allclose(phi([0.0, 1.0, 0.0]), np.pi / 2)
        npt.assert_allclose(theta([0.0, 0.0, -1.0]), np.pi)

    @pytest.mark.parametrize("direction", [[0.0, 0.0, 1.0], [1.0, 0.0, 0.0], [0.3, -0.4, 0.866]])
    def test_curvilinear_unit_vectors(self, direction):
        from trackvis.geometry import make_curvilinear_unit_vectors
        d = np.asarray(direction) / np.linalg.norm(direction)
        u, v = make_curvilinear_unit_vectors(d)
        npt.assert_allclose([np.linalg.norm(u), np.linalg.norm(v)], 1.0)
        npt.assert_allclose([u @ v, u @ d, v @ d], 0.0, atol=1e-12)
        npt.assert_allclose(np.cross(u, v), d, atol=1e-12)


# Convex meshes

class TestConvexFaceMesh:
    def test_center_last(self):
        from trackvis.geometry import convex_face_mesh
        faces, triangles = convex_face_mesh(np.zeros((5, 3)), center_last=True)
        assert faces == [(0, 1, 2, 3)]
        assert triangles == [(4, 0, 1), (4, 1, 2), (4, 2, 3), (4, 3, 0)]

    def test_without_center(self):
        from trackvis.geometry import convex_face_mesh
        faces, triangles = convex_face_mesh(np.zeros((4, 3)))
        assert faces == [(0, 1, 2, 3)]
        assert triangles == [(0, 1, 2), (0, 2, 3)]

    def test_merge_and_extent(self):
        from trackvis.geometry import Polyhedron
        a = Polyhedron.from_convex_loop(np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]]))
        b = Polyhedron.from_convex_loop(np.array([[0, 0, 2], [1, 0, 2], [0, 1, 2]]))
        m = a.merge(b)
        assert m.vertices.shape == (6, 3)
        assert m.triangular_mesh == [(0, 1, 2), (3, 4, 5)]
        npt.assert_array_equal(m.extent(), [[0, 0, 0], [1, 1, 2]])


# Surfaces and detector elements

class TestSurface:
    def test_rectangle_polyhedron(self):
        from trackvis.geometry import RectangleBounds, Surface, Transform3D
        s = Surface(Transform3D.from_translation([0.0, 0.0, 3.0]), RectangleBounds(1.0, 2.0))
        hedron = s.polyhedron()
        npt.assert_allclose(hedron.vertices,
                            [[-1, -2, 3], [1, -2, 3], [1, 2, 3], [-1, 2, 3]])
        assert len(hedron.triangular_mesh) == 2

    def test_extra_transform(self):
        from trackvis.geometry import RectangleBounds, Surface, Transform3D
        s = Surface(Transform3D(), RectangleBounds(1.0, 1.0))
        hedron = s.polyhedron(transform=Transform3D.from_translation([0.0, 0.0, -1.0]))
        npt.assert_allclose(hedron.vertices[:, 2], -1.0)

    def test_disc_polyhedron(self):
        from trackvis.geometry import RadialBounds, Surface, Transform3D
        s = Surface(Transform3D(), RadialBounds(0.0, 2.0))
        hedron = s.polyhedron(lseg=16)
        assert hedron.vertices.shape == (17, 3)
        npt.assert_allclose(np.linalg.norm(hedron.vertices[:-1], axis=1), 2.0)
        assert len(hedron.triangular_mesh) == 16

    def test_annulus_polyhedron(self):
        from trackvis.geometry import RadialBounds, Surface, Transform3D
        s = Surface(Transform3D(), RadialBounds(1.0, 2.0))
        hedron = s.polyhedron(lseg=10)
        assert hedron.vertices.shape == (20, 3)
        assert len(hedron.faces) == 10
        assert len(hedron.triangular_mesh) == 20

    def test_bounds_validation(self):
        from trackvis.geometry import RadialBounds, RectangleBounds
        with pytest.raises(ValueError):
            RectangleBounds(0.0, 1.0)
        with pytest.raises(ValueError):
            RadialBounds(2.0, 1.0)

    def test_bounds_dict_round_trip(self):
        from trackvis.geometry import RadialBounds, RectangleBounds, bounds_from_dict
        for b in (RectangleBounds(1.0, 2.0), RadialBounds(0.5, 3.0)):
            assert bounds_from_dict(b.to_dict()) == b
        with pytest.raises(ValueError, match="Unknown bounds kind"):
            bounds_from_dict({'kind': 'trapezoid'})

    def test_local_to_global(self):
        from trackvis.geometry import RectangleBounds, Surface, Transform3D
        t = (Transform3D.from_translation([0.0, 0.0, 10.0])
             @ Transform3D.from_angle_axis(np.pi / 2, [0.0, 0.0, 1.0]))
        s = Surface(t, RectangleBounds(5.0, 5.0))
        g = s.local_to_global(None, [1.0, 0.0])
        npt.assert_allclose(g, [0.0, 1.0, 10.0], atol=1e-15)
        npt.assert_allclose(s.global_to_local(None, g), [1.0, 0.0], atol=1e-15)

    def test_alignment(self):
        from trackvis.context import GeometryContext
        from trackvis.geometry import RectangleBounds, Surface, Transform3D
        nominal = Transform3D()
        aligned = Transform3D.from_translation([0.1, 0.0, 0.0])
        s = Surface(nominal, RectangleBounds(1.0, 1.0), identifier=3)
        assert s.transform(GeometryContext(alignment={3: aligned})) is aligned
        assert s.transform(GeometryContext(alignment={4: aligned})) is nominal
        assert s.transform() is nominal

    def test_detector_element(self):
        from trackvis.geometry import DetectorElement, RectangleBounds, Transform3D
        t = (Transform3D.from_translation([0.0, 0.0, 100.0])
             @ Transform3D.from_angle_axis(np.pi / 2, [1.0, 0.0, 0.0]))
        element = DetectorElement(7, t, RectangleBounds(10.0, 20.0), thickness=0.15)
        assert element.surface.identifier == 7
        assert element.surface.bounds is element.bounds
        npt.assert_allclose(element.center(), [0.0, 0.0, 100.0])
        npt.assert_allclose(element.normal(), [0.0, -1.0, 0.0], atol=1e-15)

    def test_registry_lookup(self):
        from trackvis.geometry import bounds_polyhedron_methods
        assert set(bounds_polyhedron_methods.available()) == {'rectangle', 'radial'}


# Arrows and surface drawing

class TestArrow:
    def test_tip_at_end(self):
        from trackvis.visualization import arrow_polyhedron
        end = np.array([0.0, 0.0, 3.0])
        hedron = arrow_polyhedron([0.0, 0.0, 0.0], end, lseg=12)
        assert np.any(np.all(np.isclose(hedron.vertices, end), axis=1))
        npt.assert_allclose(hedron.extent()[:, 2], [0.0, 3.0])
        # shaft (2 rings) + head (ring + tip) + plate (ring + center)
        assert hedron.vertices.shape == (2 * 12 + 2 * 13, 3)

    def test_short_arrow_has_no_shaft(self):
        from trackvis.visualization import arrow_polyhedron
        hedron = arrow_polyhedron([0.0, 0.0, 0.0], [0.0, 0.05, 0.0], lseg=8)
        assert hedron.vertices.shape == (2 * 9, 3)

    def test_zero_length(self):
        from trackvis.visualization import arrow_polyhedron
        with pytest.raises(ValueError, match="coincide"):
            arrow_polyhedron([1.0, 1.0, 1.0], [1.0, 1.0, 1.0])

    def test_single_draw_call(self):
        from trackvis.visualization import RecordingSink, draw_arrow_forward
        sink = RecordingSink()
        draw_arrow_forward(sink, [0, 0, 0], [1, 1, 1], lseg=8, color=(1, 2, 3))
        assert len(sink.calls) == 1
        assert sink.calls[0].filled
        assert sink.calls[0].color == (1, 2, 3)

    def test_draw_zero_length_arrow_is_skipped(self):
        from trackvis.visualization import RecordingSink, draw_arrow_forward
        sink = RecordingSink()
        assert draw_arrow_forward(sink, [1, 1, 1], [1, 1, 1], lseg=8) is None
        assert sink.calls == []

    def test_draw_surface_wireframe(self):
        from trackvis.geometry import RectangleBounds, Surface, Transform3D
        from trackvis.visualization import RecordingSink, draw_surface
        sink = RecordingSink()
        draw_surface(sink, Surface(Transform3D(), RectangleBounds(1.0, 1.0)), wireframe=True)
        assert len(sink.calls) == 1
        assert not sink.calls[0].filled
        assert sink.calls[0].color == (235, 198, 52)
        # outline only, no fan diagonal
        assert sink.calls[0].faces == [(0, 1, 2, 3)]

    def test_draw_surface_triangulated(self):
        from trackvis.geometry import RadialBounds, Surface, Transform3D
        from trackvis.visualization import RecordingSink, draw_surface
        sink = RecordingSink()
        draw_surface(sink, Surface(Transform3D(), RadialBounds(0.0, 2.0)), lseg=6,
                     wireframe=True, triangulate=True)
        assert len(sink.calls[0].faces) == 6
        assert all(len(f) == 3 and 6 in f for f in sink.calls[0].faces)
