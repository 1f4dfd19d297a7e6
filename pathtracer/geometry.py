"""
Геометрические примитивы: пересечение луча со сферой.
"""

import numpy as np
from numba import njit
from .math_utils import dot, ray_at


@njit(cache=True, error_model="numpy")
def sphere_root(center, radius, ray_origin, ray_dir, t_min, t_max):
    """
    Параметр t пересечения луча со сферой.

    Решаем a*t^2 + 2*half_b*t + c = 0 (вариант с половинным b).
    Сначала проверяется ближний корень, затем дальний; оба должны
    лежать в [t_min, t_max].

    Возвращает: (hit, t)
    """
    # oc = ray_origin - center, покомпонентно, без выделения массива
    ocx = ray_origin[0] - center[0]
    ocy = ray_origin[1] - center[1]
    ocz = ray_origin[2] - center[2]

    a = dot(ray_dir, ray_dir)
    half_b = ocx * ray_dir[0] + ocy * ray_dir[1] + ocz * ray_dir[2]
    c = ocx * ocx + ocy * ocy + ocz * ocz - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0.0:
        return False, -1.0

    sqrtd = np.sqrt(discriminant)

    # Ближний корень, потом дальний
    root = (-half_b - sqrtd) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrtd) / a
        if root < t_min or root > t_max:
            return False, -1.0

    return True, root


@njit(cache=True)
def set_face_normal(direction, outward_normal):
    """
    Ориентирует нормаль против падающего луча.

    Возвращает: (front_face, normal)
        front_face: True, если луч попал во внешнюю сторону поверхности
    """
    front_face = dot(direction, outward_normal) < 0.0
    if front_face:
        return True, outward_normal
    return False, -outward_normal


@njit(cache=True, error_model="numpy")
def sphere_record(center, radius, ray_origin, ray_dir, t):
    """
    Точка попадания и ориентированная нормаль для найденного t.

    Возвращает: (hit_point, normal, front_face)
    """
    hit_point = ray_at(ray_origin, ray_dir, t)
    outward_normal = (hit_point - center) / radius
    front_face, normal = set_face_normal(ray_dir, outward_normal)
    return hit_point, normal, front_face


@njit(cache=True)
def hit_sphere(center, radius, ray_origin, ray_dir, t_min, t_max):
    """
    Пересечение луча со сферой.

    Возвращает: (hit, t, hit_point, normal, front_face)
        hit: False, если пересечения нет (остальные поля не определены)
    """
    hit, t = sphere_root(center, radius, ray_origin, ray_dir, t_min, t_max)
    if not hit:
        return False, -1.0, np.zeros(3), np.zeros(3), False

    hit_point, normal, front_face = sphere_record(center, radius, ray_origin, ray_dir, t)
    return True, t, hit_point, normal, front_face
