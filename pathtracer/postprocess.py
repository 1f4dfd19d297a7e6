"""
Постобработка: усреднение, гамма-коррекция, сохранение изображений.
"""

import logging
import os

import numpy as np


logger = logging.getLogger(__name__)

# Верхняя граница канала перед квантованием в 8 бит
CLAMP_MAX = 0.999


def gamma_correct(image, samples_per_pixel):
    """
    Усреднение по сэмплам и гамма-коррекция с гаммой 2: V_corr = sqrt(V).
    """
    scale = 1.0 / samples_per_pixel
    return np.sqrt(image * scale)


def quantize(image):
    """Отсечение в [0, 0.999] и перевод в 8 бит: floor(256 * v)."""
    clamped = np.clip(image, 0.0, CLAMP_MAX)
    return np.floor(256.0 * clamped).astype(np.uint8)


def to_8bit(image, samples_per_pixel):
    """
    Постобработка сырого массива сумм:
    1. Усреднение по сэмплам
    2. Гамма-коррекция (корень)
    3. Отсечение и квантование в 0..255
    """
    return quantize(gamma_correct(image, samples_per_pixel))


def save_ppm(filename, pixels):
    """
    Сохранение в формате PPM (P3 - текстовый).

    Формат PPM:
    - P3 - магическое число (текстовый RGB)
    - ширина высота
    - максимальное значение (255)
    - по одному пикселю "r g b" на строку, сверху вниз, слева направо

    Ошибки записи не перехватываются.
    """
    height, width = pixels.shape[:2]

    with open(filename, 'w') as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for y in range(height):
            for x in range(width):
                r, g, b = pixels[y, x]
                f.write(f"{r} {g} {b}\n")

    path = os.path.abspath(filename)
    logger.info("Сохранено: %s", path)
    return path
