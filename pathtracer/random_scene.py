"""
Создание демонстрационной сцены: поле случайных шариков и три большие сферы.
"""

import numpy as np
from .scene import Scene
from .materials import Lambertian, Metal, Dielectric


def add_showcase_spheres(scene: Scene):
    """Три большие сферы: стекло в центре, диффузная слева, металл справа."""
    scene.add_sphere([0.0, 1.0, 0.0], 1.0, Dielectric(1.5))
    scene.add_sphere([-4.0, 1.0, 0.0], 1.0, Lambertian((0.4, 0.2, 0.1)))
    scene.add_sphere([4.0, 1.0, 0.0], 1.0, Metal((0.7, 0.6, 0.5), 0.0))


def random_scene(seed=None) -> Scene:
    """
    Собирает демонстрационную сцену.

    Параметры:
        seed: зерно генератора (None - каждый раз новая сцена)

    Материал маленьких шариков: 80% диффузный, 15% металл, 5% стекло.
    Шарики, попадающие рядом с металлической сферой, пропускаются.
    """
    rng = np.random.default_rng(seed)
    scene = Scene()

    # Земля
    scene.add_sphere([0.0, -1000.0, 0.0], 1000.0, Lambertian((0.5, 0.5, 0.5)))

    keep_out = np.array([4.0, 0.2, 0.0])

    for a in range(-11, 12):
        for b in range(-11, 12):
            choose_mat = rng.random()
            center = np.array([a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random()])

            if np.linalg.norm(center - keep_out) <= 0.9:
                continue

            if choose_mat < 0.8:
                # Диффузный
                albedo = rng.random(3) * rng.random(3)
                scene.add_sphere(center, 0.2, Lambertian(tuple(albedo)))
            elif choose_mat < 0.95:
                # Металл
                albedo = rng.uniform(0.5, 1.0, 3)
                fuzz = rng.uniform(0.0, 0.5)
                scene.add_sphere(center, 0.2, Metal(tuple(albedo), fuzz))
            else:
                # Стекло
                scene.add_sphere(center, 0.2, Dielectric(1.5))

    add_showcase_spheres(scene)

    scene.compile()
    return scene
