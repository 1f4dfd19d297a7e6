"""
Материалы и рассеяние луча на поверхности.

На стороне Python материал - один из трёх неизменяемых классов
(Lambertian, Metal, Dielectric). В скомпилированном коде тип материала
хранится целым кодом, а параметры - в массивах по сферам.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from numba import njit
from .math_utils import (dot, length_squared, unit_vector, reflect, refract,
                         random_double, random_in_unit_sphere, random_unit_vector)


# Коды типов материалов
LAMBERTIAN = 0
METAL = 1
DIELECTRIC = 2


@dataclass(frozen=True)
class Lambertian:
    """Диффузный материал (Ламберт). albedo - отражательная способность по каналам."""

    albedo: Tuple[float, float, float]


@dataclass(frozen=True)
class Metal:
    """
    Металл.

    fuzz - шероховатость. Значения больше 1 не обрезаются: конус отражения
    просто становится шире, и поверхность темнеет.
    """

    albedo: Tuple[float, float, float]
    fuzz: float = 0.0


@dataclass(frozen=True)
class Dielectric:
    """Стекло с показателем преломления ir."""

    ir: float


Material = Union[Lambertian, Metal, Dielectric]


def material_params(material: Material):
    """
    Раскладывает материал на (код, albedo, fuzz, ir) для массивов сцены.
    """
    if isinstance(material, Lambertian):
        return LAMBERTIAN, np.array(material.albedo, dtype=np.float64), 0.0, 1.0
    if isinstance(material, Metal):
        return METAL, np.array(material.albedo, dtype=np.float64), float(material.fuzz), 1.0
    if isinstance(material, Dielectric):
        return DIELECTRIC, np.ones(3), 0.0, float(material.ir)
    raise TypeError(f"Неизвестный материал: {material!r}")


def material_from_params(kind, albedo, fuzz, ir) -> Material:
    """Обратное преобразование: восстанавливает материал по строке массивов."""
    if kind == LAMBERTIAN:
        return Lambertian(tuple(float(x) for x in albedo))
    if kind == METAL:
        return Metal(tuple(float(x) for x in albedo), float(fuzz))
    if kind == DIELECTRIC:
        return Dielectric(float(ir))
    raise ValueError(f"Неизвестный код материала: {kind}")


@njit(cache=True, error_model="numpy")
def schlick(ir, cosine):
    """Аппроксимация Шлика для коэффициента отражения Френеля."""
    r0 = (1.0 - ir) / (1.0 + ir)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine)**5


@njit(cache=True)
def lambertian_direction(normal, offset):
    """
    Направление диффузного рассеяния normal + offset.

    Если сумма почти нулевая (offset ~ -normal), возвращается сама нормаль.
    """
    direction = normal + offset
    if length_squared(direction) < 1e-8:
        return normal.copy()
    return direction


@njit(cache=True, error_model="numpy")
def scatter(kind, albedo, fuzz, ir, ray_dir, normal, front_face):
    """
    Рассеяние луча на поверхности.

    Параметры:
        kind, albedo, fuzz, ir: материал точки попадания
        ray_dir: направление падающего луча
        normal: нормаль, ориентированная против луча
        front_face: попали ли во внешнюю сторону поверхности

    Возвращает: (scattered, attenuation, new_dir)
        scattered: False - луч поглощён
    """
    if kind == LAMBERTIAN:
        new_dir = lambertian_direction(normal, random_unit_vector())
        return True, albedo, new_dir

    if kind == METAL:
        reflected = reflect(unit_vector(ray_dir), normal)
        new_dir = reflected + random_in_unit_sphere() * fuzz
        # Отражение ушло под поверхность - луч поглощается
        if dot(new_dir, normal) > 0.0:
            return True, albedo, new_dir
        return False, np.zeros(3), new_dir

    # Диэлектрик: стекло не окрашивает луч
    attenuation = np.ones(3)
    refraction_ratio = 1.0 / ir if front_face else ir
    unit_dir = unit_vector(ray_dir)

    cos_theta = min(dot(-unit_dir, normal), 1.0)
    sin_theta = np.sqrt(1.0 - cos_theta * cos_theta)

    # Полное внутреннее отражение
    cannot_refract = refraction_ratio * sin_theta > 1.0

    if cannot_refract or schlick(ir, cos_theta) > random_double():
        new_dir = reflect(unit_dir, normal)
    else:
        new_dir = refract(unit_dir, normal, refraction_ratio)

    return True, attenuation, new_dir
