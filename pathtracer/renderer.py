"""
Ядро рендеринга методом трассировки путей (Path Tracing).
"""

import logging
import time

import numpy as np
from numba import njit, prange
from .math_utils import unit_vector, random_double
from .scene import intersect_scene
from .materials import scatter
from .camera import get_ray


logger = logging.getLogger(__name__)

# Нижняя граница t: отсекает самопересечение в начале отражённого луча
T_MIN = 0.001


@njit(cache=True)
def sky_color(ray_dir):
    """Вертикальный градиент неба: белый у горизонта, голубой в зените."""
    unit_dir = unit_vector(ray_dir)
    t = 0.5 * (unit_dir[1] + 1.0)
    return np.ones(3) * (1.0 - t) + np.array([0.5, 0.7, 1.0]) * t


@njit(cache=True)
def trace_ray(ray_origin, ray_dir, depth,
              centers, radii, kinds, albedo, fuzz, ir):
    """
    Цвет, который приносит луч.

    Алгоритм:
    1. Находим ближайшее пересечение луча со сценой
    2. Если луч ушёл в пустоту - возвращаем цвет неба
    3. Иначе рассеиваем луч по материалу и продолжаем путь
    4. Поглощённый луч или исчерпанная глубина дают чёрный цвет

    Рекурсия "цвет = затухание * цвет(рассеянный луч)" развёрнута в цикл
    с накопленным коэффициентом пропускания.

    Параметры:
        depth: максимальное число отскоков (depth <= 0 - сразу чёрный)
    """
    throughput = np.ones(3)       # коэффициент пропускания пути

    current_origin = ray_origin.copy()
    current_dir = ray_dir.copy()

    for _ in range(depth):
        idx, t, hit_point, normal, front_face = intersect_scene(
            current_origin, current_dir, T_MIN, np.inf, centers, radii
        )

        # Луч ушёл в пустоту
        if idx < 0:
            return throughput * sky_color(current_dir)

        scattered, attenuation, new_dir = scatter(
            kinds[idx], albedo[idx], fuzz[idx], ir[idx],
            current_dir, normal, front_face
        )
        if not scattered:
            return np.zeros(3)

        throughput = throughput * attenuation
        current_origin = hit_point
        current_dir = new_dir

    # Глубина исчерпана: энергия пути теряется
    return np.zeros(3)


@njit(parallel=True, cache=True, error_model="numpy")
def render_image(width, height, samples_per_pixel, max_depth,
                 cam_origin, cam_lower_left, cam_horizontal, cam_vertical,
                 cam_u, cam_v, lens_radius,
                 centers, radii, kinds, albedo, fuzz, ir,
                 jitter=True):
    """
    Рендеринг изображения методом трассировки путей.

    Для каждого пикселя запускается samples_per_pixel лучей,
    их цвета суммируются. Усреднение и гамма-коррекция выполняются
    в постобработке.

    Строки обрабатываются параллельно; каждая строка пишет только
    в свои пиксели. Строка 0 - верх изображения, а ось t камеры
    направлена вверх, поэтому строка переворачивается.

    Возвращает массив (height, width, 3) сумм по сэмплам.
    """
    image = np.zeros((height, width, 3))

    # Параллельный цикл по строкам
    for j in prange(height):
        scanline = height - 1 - j
        for i in range(width):
            pixel_color = np.zeros(3)

            for _ in range(samples_per_pixel):
                # Случайное смещение внутри пикселя для антиалиасинга
                if jitter:
                    du = random_double()
                    dv = random_double()
                else:
                    du = 0.5
                    dv = 0.5

                s = (i + du) / (width - 1)
                t = (scanline + dv) / (height - 1)

                origin, direction = get_ray(
                    s, t, cam_origin, cam_lower_left, cam_horizontal, cam_vertical,
                    cam_u, cam_v, lens_radius
                )

                pixel_color = pixel_color + trace_ray(
                    origin, direction, max_depth,
                    centers, radii, kinds, albedo, fuzz, ir
                )

            image[j, i] = pixel_color

    return image


def render(scene, camera, config, jitter=True):
    """
    Рендерит сцену камерой с параметрами config.

    Возвращает сырой массив сумм (height, width, 3).
    """
    logger.info("Рендеринг %dx%d, %d сэмплов/пиксель, глубина %d...",
                config.width, config.height, config.samples_per_pixel, config.max_depth)

    start_time = time.time()

    image = render_image(
        config.width, config.height, config.samples_per_pixel, config.max_depth,
        *camera.arrays(),
        *scene.arrays(),
        jitter
    )

    elapsed = time.time() - start_time
    logger.info("Завершено за %.1f секунд", elapsed)

    return image
