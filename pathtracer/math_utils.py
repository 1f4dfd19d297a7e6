"""
Математические утилиты для работы с 3D векторами.
Оптимизировано с помощью numba для ускорения.

Вектор - это numpy массив формы (3,) типа float64. Сложение, вычитание,
умножение на скаляр и покомпонентное умножение выполняются обычными
операторами numpy.

Функции собраны без fastmath: NaN и Inf должны проходить через вычисления
как есть (например, нормализация нулевого вектора даёт NaN).
"""

import numpy as np
from numba import njit


@njit(cache=True)
def dot(a, b):
    """Скалярное произведение двух векторов."""
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


@njit(cache=True)
def cross(a, b):
    """Векторное произведение двух векторов."""
    return np.array([
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0]
    ])


@njit(cache=True)
def length_squared(v):
    """Квадрат длины вектора."""
    return v[0]*v[0] + v[1]*v[1] + v[2]*v[2]


@njit(cache=True)
def length(v):
    """Длина вектора."""
    return np.sqrt(length_squared(v))


@njit(cache=True, error_model="numpy")
def unit_vector(v):
    """
    Единичный вектор того же направления.

    Защиты от нулевой длины нет: для нулевого вектора результат - NaN.
    """
    return v / length(v)


@njit(cache=True)
def ray_at(origin, direction, t):
    """Точка луча: origin + t * direction."""
    return origin + direction * t


@njit(cache=True)
def reflect(v, n):
    """Зеркальное отражение вектора v относительно нормали n."""
    return v - n * (2.0 * dot(v, n))


@njit(cache=True)
def refract(uv, n, etai_over_etat):
    """
    Преломление единичного вектора uv по закону Снеллиуса.

    Параметры:
        uv: единичное направление падающего луча
        n: единичная нормаль, направленная против луча
        etai_over_etat: отношение показателей преломления
    """
    # min(...) защищает от cos > 1 из-за ошибок округления
    cos_theta = min(dot(-uv, n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -np.sqrt(abs(1.0 - length_squared(r_out_perp)))
    return r_out_perp + r_out_parallel


# ==================== СЛУЧАЙНЫЕ ВЕЛИЧИНЫ ====================
# Генератор np.random внутри numba хранит отдельное состояние для каждого
# потока, поэтому параллельные строки не делят общий генератор.

@njit(cache=True)
def seed_generator(seed):
    """Инициализирует генератор текущего потока."""
    np.random.seed(seed)


@njit(cache=True)
def random_double():
    """Случайное число в [0, 1)."""
    return np.random.random()


@njit(cache=True)
def random_double_range(lo, hi):
    """Случайное число в [lo, hi)."""
    return lo + (hi - lo) * np.random.random()


@njit(cache=True)
def random_vec():
    """Вектор со случайными компонентами в [0, 1)."""
    return np.array([np.random.random(), np.random.random(), np.random.random()])


@njit(cache=True)
def random_vec_range(lo, hi):
    """Вектор со случайными компонентами в [lo, hi)."""
    return np.array([
        random_double_range(lo, hi),
        random_double_range(lo, hi),
        random_double_range(lo, hi)
    ])


@njit(cache=True)
def random_in_unit_sphere():
    """
    Случайная точка внутри единичного шара (метод отбраковки).

    Число попыток не ограничено: в среднем около двух.
    """
    while True:
        p = random_vec_range(-1.0, 1.0)
        if length_squared(p) < 1.0:
            return p


@njit(cache=True)
def random_unit_vector():
    """Случайный единичный вектор."""
    return unit_vector(random_in_unit_sphere())


@njit(cache=True)
def random_in_unit_disk():
    """Случайная точка внутри единичного круга в плоскости XY (z = 0)."""
    while True:
        p = np.array([random_double_range(-1.0, 1.0),
                      random_double_range(-1.0, 1.0),
                      0.0])
        if length_squared(p) < 1.0:
            return p
