"""
Замеры производительности основных операций трассировщика.

Запуск: python -m pathtracer.benchmark
"""

import logging
import time

import numpy as np
from .camera import Camera
from .config import RenderConfig
from .logging_config import setup_logging
from .postprocess import quantize
from .random_scene import random_scene
from .renderer import render_image, trace_ray
from .scene import Scene, intersect_scene


logger = logging.getLogger(__name__)


def _camera(aspect_ratio):
    config = RenderConfig()
    return Camera(config.look_from, config.look_at, config.vup, config.vfov,
                  aspect_ratio, config.aperture, config.focus_dist)


def checksum(image):
    """XOR упакованных (r << 16) | (g << 8) | b по всем пикселям."""
    pixels = quantize(image).astype(np.int64)
    packed = (pixels[..., 0] << 16) | (pixels[..., 1] << 8) | pixels[..., 2]
    return int(np.bitwise_xor.reduce(packed.ravel())) if packed.size else 0


def render_checksum(width, height, samples, scene, depth):
    """
    Рендер без гамма-коррекции, усреднённый по сэмплам; возвращает контрольную сумму.

    Строки идут сверху вниз, как в render_image. XOR не зависит от порядка
    пикселей, поэтому с рендером снизу вверх сумма совпадает.
    """
    camera = _camera(width / height)
    image = render_image(width, height, samples, depth, *camera.arrays(), *scene.arrays())
    return checksum(image / samples)


def _timed(results, name, func, repeats):
    start = time.perf_counter()
    value = None
    for _ in range(repeats):
        value = func()
    elapsed = (time.perf_counter() - start) / repeats
    results[name] = elapsed
    logger.info("%-32s %10.4f с", name, elapsed)
    return value


def run_benchmarks(width=250, samples_per_pixel=100, max_depth=50, repeats=1, seed=None):
    """
    Прогоняет набор замеров.

    Первый вызов каждого ядра включает компиляцию numba, поэтому
    перед замером выполняется прогрев на крошечном изображении.

    Возвращает словарь: имя замера -> среднее время в секундах.
    """
    world = random_scene(seed)
    empty_world = Scene().compile()
    camera = _camera(16.0 / 9.0)
    height = max(1, int(width * 9.0 / 16.0))

    # Прогрев (компиляция)
    render_checksum(2, 2, 1, world, 2)

    origin = np.zeros(3)
    forward = np.array([0.0, 0.0, 1.0])

    results = {}
    _timed(results, "scene_generation", lambda: random_scene(seed), repeats)
    _timed(results, "single_ray_tracing",
           lambda: trace_ray(*camera.get_ray(0.5, 0.5), max_depth, *world.arrays()), repeats)
    _timed(results, "ray_intersection",
           lambda: intersect_scene(origin, forward, 0.0, np.inf, world.centers, world.radii), repeats)
    _timed(results, "camera_ray_generation", lambda: camera.get_ray(0.5, 0.5), repeats)
    _timed(results, "small_render_10x10_1sample",
           lambda: render_checksum(10, 10, 1, world, 10), repeats)
    _timed(results, "medium_render_50x50_4samples",
           lambda: render_checksum(50, 50, 4, world, 10), repeats)
    _timed(results, "realistic_random_scene_render",
           lambda: render_checksum(width, height, samples_per_pixel, world, max_depth), repeats)
    _timed(results, "gradient_render",
           lambda: render_checksum(width, height, samples_per_pixel, empty_world, max_depth), repeats)

    return results


def main():
    setup_logging()
    run_benchmarks()
    return 0


if __name__ == "__main__":
    main()
