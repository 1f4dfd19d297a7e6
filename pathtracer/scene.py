"""
Сцена: хранение сфер и их материалов.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numba import njit
from .geometry import sphere_root, sphere_record
from .materials import Material, material_params, material_from_params


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sphere:
    """Сфера: центр, радиус (> 0) и материал."""

    center: Tuple[float, float, float]
    radius: float
    material: Material


@dataclass(frozen=True)
class Intersection:
    """
    Результат пересечения луча со сценой.

    normal всегда направлена против падающего луча; front_face=True
    означает, что она совпадает с внешней нормалью сферы.
    """

    p: Tuple[float, float, float]
    normal: Tuple[float, float, float]
    material: Material
    t: float
    front_face: bool


class Scene:
    """
    Контейнер для 3D сцены.

    Хранит упорядоченный список сфер. Вложенные сцены разворачиваются
    в плоский список при добавлении (extend).

    После compile() данные лежат в numpy массивах и только читаются
    всеми потоками рендеринга.
    """

    def __init__(self, spheres=None):
        # Список для построения сцены
        self._spheres = []

        # Финальные numpy массивы (создаются при compile())
        self.centers = None   # shape: (n_spheres, 3) - центры
        self.radii = None     # shape: (n_spheres,) - радиусы
        self.kinds = None     # shape: (n_spheres,) - коды материалов
        self.albedo = None    # shape: (n_spheres, 3) - цвет
        self.fuzz = None      # shape: (n_spheres,) - шероховатость металла
        self.ir = None        # shape: (n_spheres,) - показатель преломления

        for sphere in spheres or ():
            self.add(sphere)

    def __len__(self):
        return len(self._spheres)

    def __iter__(self):
        return iter(self._spheres)

    @property
    def spheres(self):
        return tuple(self._spheres)

    @property
    def compiled(self):
        return self.centers is not None and len(self.centers) == len(self._spheres)

    def add(self, sphere: Sphere):
        """Добавляет готовую сферу."""
        self._spheres.append(sphere)
        self.centers = None
        return sphere

    def add_sphere(self, center, radius: float, material: Material):
        """Добавляет сферу с заданным материалом."""
        return self.add(Sphere(tuple(float(x) for x in center), float(radius), material))

    def extend(self, other: "Scene"):
        """Добавляет все сферы другой сцены (сцена остаётся плоской)."""
        for sphere in other:
            self.add(sphere)

    def compile(self):
        """
        Компилирует сцену в numpy массивы для быстрого доступа.
        Вызывать после добавления всей геометрии.
        """
        n = len(self._spheres)

        self.centers = np.zeros((n, 3), dtype=np.float64)
        self.radii = np.zeros(n, dtype=np.float64)
        self.kinds = np.zeros(n, dtype=np.int32)
        self.albedo = np.zeros((n, 3), dtype=np.float64)
        self.fuzz = np.zeros(n, dtype=np.float64)
        self.ir = np.ones(n, dtype=np.float64)

        # Параметры материала копируются в строку каждой сферы
        for i, sphere in enumerate(self._spheres):
            kind, albedo, fuzz, ir = material_params(sphere.material)
            self.centers[i] = sphere.center
            self.radii[i] = sphere.radius
            self.kinds[i] = kind
            self.albedo[i] = albedo
            self.fuzz[i] = fuzz
            self.ir[i] = ir

        counts = np.bincount(self.kinds, minlength=3)
        logger.info("Сцена: %d сфер (диффузных %d, металлических %d, стеклянных %d)",
                    n, counts[0], counts[1], counts[2])
        return self

    def arrays(self):
        """Массивы сцены в порядке аргументов ядер рендеринга."""
        if not self.compiled:
            self.compile()
        return self.centers, self.radii, self.kinds, self.albedo, self.fuzz, self.ir

    def hit(self, ray_origin, ray_dir, t_min=0.001, t_max=np.inf) -> Optional[Intersection]:
        """Ближайшее пересечение луча со сценой или None."""
        centers, radii, kinds, albedo, fuzz, ir = self.arrays()
        idx, t, hit_point, normal, front_face = intersect_scene(
            np.asarray(ray_origin, dtype=np.float64),
            np.asarray(ray_dir, dtype=np.float64),
            t_min, t_max, centers, radii
        )
        if idx < 0:
            return None
        material = material_from_params(kinds[idx], albedo[idx], fuzz[idx], ir[idx])
        return Intersection(tuple(float(x) for x in hit_point), tuple(float(x) for x in normal),
                            material, float(t), bool(front_face))


@njit(cache=True)
def intersect_scene(ray_origin, ray_dir, t_min, t_max, centers, radii):
    """
    Поиск ближайшего пересечения луча со сценой.

    Перебирает все сферы по порядку; каждая проверяется на отрезке
    [t_min, closest_so_far], который сужается после каждого попадания.
    При точном равенстве t побеждает сфера, идущая раньше.

    Возвращает: (index, t, hit_point, normal, front_face)
        index: номер сферы (-1 если нет пересечения)
    """
    closest_so_far = t_max
    hit_idx = -1

    for i in range(centers.shape[0]):
        hit, t = sphere_root(centers[i], radii[i], ray_origin, ray_dir, t_min, closest_so_far)
        # Интервал включает границу, поэтому равное t не перезаписывает попадание
        if hit and (hit_idx < 0 or t < closest_so_far):
            closest_so_far = t
            hit_idx = i

    # Нет пересечения
    if hit_idx < 0:
        return -1, -1.0, np.zeros(3), np.zeros(3), False

    hit_point, normal, front_face = sphere_record(
        centers[hit_idx], radii[hit_idx], ray_origin, ray_dir, closest_so_far
    )
    return hit_idx, closest_so_far, hit_point, normal, front_face
