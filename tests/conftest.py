"""Общие фикстуры тестов."""

import numpy as np
import pytest

from pathtracer.config import RenderConfig
from pathtracer.materials import Dielectric, Lambertian, Metal
from pathtracer.scene import Scene


@pytest.fixture
def empty_scene():
    return Scene().compile()


@pytest.fixture
def unit_sphere_scene():
    """Одна диффузная сфера радиуса 1 в начале координат."""
    scene = Scene()
    scene.add_sphere([0.0, 0.0, 0.0], 1.0, Lambertian((0.5, 0.5, 0.5)))
    return scene.compile()


@pytest.fixture
def mirror_scene():
    """Сцена без случайности в рассеянии: только идеальные зеркала."""
    scene = Scene()
    scene.add_sphere([0.0, -100.5, -1.0], 100.0, Metal((0.8, 0.8, 0.0), 0.0))
    scene.add_sphere([0.0, 0.0, -1.0], 0.5, Metal((0.7, 0.3, 0.3), 0.0))
    scene.add_sphere([1.0, 0.0, -1.0], 0.5, Metal((0.8, 0.6, 0.2), 0.0))
    return scene.compile()


@pytest.fixture
def mixed_scene():
    scene = Scene()
    scene.add_sphere([0.0, -100.5, -1.0], 100.0, Lambertian((0.8, 0.8, 0.0)))
    scene.add_sphere([0.0, 0.0, -1.0], 0.5, Dielectric(1.5))
    scene.add_sphere([1.0, 0.0, -1.0], 0.5, Metal((0.8, 0.6, 0.2), 1.0))
    return scene.compile()


@pytest.fixture
def small_config():
    return RenderConfig(width=16, height=9, samples_per_pixel=2, max_depth=5)


@pytest.fixture
def origin():
    return np.zeros(3)
