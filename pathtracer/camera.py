"""
Камера с тонкой линзой (глубина резкости).
"""

import numpy as np
from numba import njit
from .math_utils import unit_vector, cross, random_in_unit_disk


class Camera:
    """
    Камера с тонкой линзой.

    Параметры:
        look_from: позиция камеры в пространстве
        look_at: точка, на которую смотрит камера
        vup: вектор "вверх" (обычно [0, 1, 0])
        vfov: угол обзора по вертикали в градусах
        aspect_ratio: отношение ширины изображения к высоте
        aperture: диаметр линзы (0 - точечная камера)
        focus_dist: расстояние до плоскости фокуса
    """

    def __init__(self, look_from, look_at, vup, vfov, aspect_ratio, aperture, focus_dist):
        look_from = np.array(look_from, dtype=np.float64)
        look_at = np.array(look_at, dtype=np.float64)
        vup = np.array(vup, dtype=np.float64)

        # Размер видового окна (зависит от FOV)
        theta = vfov * np.pi / 180.0
        h = np.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Ортонормированный базис камеры
        self.w = unit_vector(look_from - look_at)
        self.u = unit_vector(cross(vup, self.w))
        self.v = cross(self.w, self.u)

        self.origin = look_from
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left_corner = (self.origin - self.horizontal / 2.0
                                  - self.vertical / 2.0 - self.w * focus_dist)
        self.lens_radius = aperture / 2.0

    @classmethod
    def from_config(cls, config):
        """Камера по параметрам RenderConfig."""
        return cls(config.look_from, config.look_at, config.vup, config.vfov,
                   config.aspect_ratio, config.aperture, config.focus_dist)

    def arrays(self):
        """Параметры камеры в порядке аргументов get_ray."""
        return (self.origin, self.lower_left_corner, self.horizontal, self.vertical,
                self.u, self.v, self.lens_radius)

    def get_ray(self, s, t):
        """Луч через точку (s, t) плоскости изображения."""
        return get_ray(s, t, *self.arrays())


@njit(cache=True)
def get_ray(s, t, origin, lower_left_corner, horizontal, vertical, u, v, lens_radius):
    """
    Генерирует луч для нормированных координат (s, t) в [0, 1].

    Начало луча смещается на случайную точку линзы, направление указывает
    на соответствующую точку плоскости фокуса.

    Возвращает (origin, direction).
    """
    rd = random_in_unit_disk() * lens_radius
    offset = u * rd[0] + v * rd[1]

    ray_origin = origin + offset
    direction = lower_left_corner + horizontal * s + vertical * t - origin - offset

    return ray_origin, direction
