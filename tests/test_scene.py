import numpy as np
import pytest

from pathtracer.geometry import hit_sphere, set_face_normal, sphere_root
from pathtracer.materials import Dielectric, Lambertian, Metal, LAMBERTIAN, METAL, DIELECTRIC
from pathtracer.scene import Intersection, Scene, Sphere, intersect_scene


ORIGIN = np.array([0.0, 0.0, -5.0])
FORWARD = np.array([0.0, 0.0, 1.0])


def test_hit_sphere_from_outside():
    hit, t, p, normal, front_face = hit_sphere(np.zeros(3), 1.0, ORIGIN, FORWARD, 0.001, np.inf)
    assert hit
    assert t == pytest.approx(4.0)
    np.testing.assert_allclose(p, [0.0, 0.0, -1.0])
    np.testing.assert_allclose(normal, [0.0, 0.0, -1.0])
    assert front_face


def test_hit_sphere_miss():
    hit, *_ = hit_sphere(np.zeros(3), 1.0, np.array([0.0, 2.0, -5.0]), FORWARD, 0.001, np.inf)
    assert not hit


def test_hit_sphere_from_inside_uses_far_root():
    hit, t, p, normal, front_face = hit_sphere(np.zeros(3), 1.0, np.zeros(3), FORWARD, 0.001, np.inf)
    assert hit
    assert t == pytest.approx(1.0)
    # Внешняя нормаль (0, 0, 1) развёрнута против луча
    np.testing.assert_allclose(normal, [0.0, 0.0, -1.0])
    assert not front_face


def test_hit_sphere_respects_interval():
    hit, *_ = hit_sphere(np.zeros(3), 1.0, ORIGIN, FORWARD, 0.001, 3.0)
    assert not hit
    # Ближний корень за пределами t_max, дальний (t=6) тоже
    hit, *_ = hit_sphere(np.zeros(3), 1.0, ORIGIN, FORWARD, 4.5, 5.5)
    assert not hit
    hit, t, *_ = hit_sphere(np.zeros(3), 1.0, ORIGIN, FORWARD, 4.5, 6.5)
    assert hit and t == pytest.approx(6.0)


def test_hit_sphere_unnormalized_direction():
    hit, t, p, *_ = hit_sphere(np.zeros(3), 1.0, ORIGIN, FORWARD * 2.0, 0.001, np.inf)
    assert hit
    assert t == pytest.approx(2.0)
    np.testing.assert_allclose(p, [0.0, 0.0, -1.0])


def test_set_face_normal():
    front, n = set_face_normal(FORWARD, np.array([0.0, 0.0, -1.0]))
    assert front
    np.testing.assert_array_equal(n, [0.0, 0.0, -1.0])
    front, n = set_face_normal(FORWARD, np.array([0.0, 0.0, 1.0]))
    assert not front
    np.testing.assert_array_equal(n, [0.0, 0.0, -1.0])


@pytest.fixture
def overlapping_scene():
    scene = Scene()
    # Дальняя сфера добавлена первой
    scene.add_sphere([0.0, 0.0, 0.0], 1.0, Lambertian((0.1, 0.2, 0.3)))
    scene.add_sphere([0.0, 0.0, -1.0], 1.0, Metal((0.9, 0.9, 0.9), 0.25))
    return scene.compile()


def test_closest_hit_wins_regardless_of_order(overlapping_scene):
    idx, t, p, normal, front_face = intersect_scene(
        ORIGIN, FORWARD, 0.001, np.inf, overlapping_scene.centers, overlapping_scene.radii
    )
    assert idx == 1
    assert t == pytest.approx(3.0)


def test_scene_hit_returns_intersection(overlapping_scene):
    rec = overlapping_scene.hit(ORIGIN, FORWARD)
    assert isinstance(rec, Intersection)
    assert rec.t == pytest.approx(3.0)
    assert rec.material == Metal((0.9, 0.9, 0.9), 0.25)
    assert rec.front_face
    np.testing.assert_allclose(rec.normal, [0.0, 0.0, -1.0])


def test_scene_hit_miss_returns_none(overlapping_scene):
    assert overlapping_scene.hit(ORIGIN, np.array([0.0, 0.0, -1.0])) is None


def test_empty_scene_never_hits(empty_scene):
    idx, *_ = intersect_scene(ORIGIN, FORWARD, 0.001, np.inf, empty_scene.centers, empty_scene.radii)
    assert idx == -1
    assert empty_scene.hit(ORIGIN, FORWARD) is None


def test_first_sphere_wins_exact_tie():
    scene = Scene()
    scene.add_sphere([0.0, 0.0, 0.0], 1.0, Lambertian((1.0, 0.0, 0.0)))
    scene.add_sphere([0.0, 0.0, 0.0], 1.0, Lambertian((0.0, 1.0, 0.0)))
    rec = scene.compile().hit(ORIGIN, FORWARD)
    assert rec.material == Lambertian((1.0, 0.0, 0.0))


def test_compile_copies_material_parameters():
    scene = Scene()
    scene.add_sphere([1.0, 2.0, 3.0], 0.5, Lambertian((0.1, 0.2, 0.3)))
    scene.add_sphere([0.0, 0.0, 0.0], 2.0, Metal((0.4, 0.5, 0.6), 1.7))
    scene.add_sphere([0.0, 1.0, 0.0], 1.0, Dielectric(1.5))
    scene.compile()

    np.testing.assert_array_equal(scene.kinds, [LAMBERTIAN, METAL, DIELECTRIC])
    np.testing.assert_array_equal(scene.centers[0], [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(scene.radii, [0.5, 2.0, 1.0])
    np.testing.assert_array_equal(scene.albedo[1], [0.4, 0.5, 0.6])
    # fuzz > 1 хранится как есть
    assert scene.fuzz[1] == 1.7
    assert scene.ir[2] == 1.5


def test_extend_flattens_sub_scene():
    inner = Scene()
    inner.add_sphere([0.0, 0.0, 0.0], 1.0, Dielectric(1.5))
    inner.add_sphere([2.0, 0.0, 0.0], 1.0, Dielectric(1.3))

    outer = Scene([Sphere((5.0, 0.0, 0.0), 1.0, Lambertian((0.5, 0.5, 0.5)))])
    outer.extend(inner)

    assert len(outer) == 3
    assert all(isinstance(s, Sphere) for s in outer)
    assert outer.spheres[2].material == Dielectric(1.3)


def test_adding_sphere_invalidates_compiled_arrays(unit_sphere_scene):
    assert unit_sphere_scene.compiled
    unit_sphere_scene.add_sphere([3.0, 0.0, 0.0], 1.0, Dielectric(1.5))
    assert not unit_sphere_scene.compiled
    centers, *_ = unit_sphere_scene.arrays()
    assert centers.shape == (2, 3)


def test_unknown_material_rejected():
    scene = Scene()
    scene.add_sphere([0.0, 0.0, 0.0], 1.0, "glass")
    with pytest.raises(TypeError):
        scene.compile()


def test_sphere_root_matches_hit_sphere():
    hit, t = sphere_root(np.zeros(3), 1.0, ORIGIN, FORWARD, 0.001, np.inf)
    assert hit and t == pytest.approx(4.0)
    hit, t = sphere_root(np.zeros(3), 1.0, ORIGIN, -FORWARD, 0.001, np.inf)
    assert not hit and t == -1.0


def test_intersections_compare_by_value(overlapping_scene):
    first = overlapping_scene.hit(ORIGIN, FORWARD)
    second = overlapping_scene.hit(ORIGIN.copy(), FORWARD.copy())
    assert first == second
    assert first != overlapping_scene.hit(ORIGIN, FORWARD, 3.5, np.inf)
    assert isinstance(first.p, tuple) and len(first.normal) == 3
