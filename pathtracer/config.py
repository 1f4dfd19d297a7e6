"""
Конфигурация рендеринга.
"""

import os
from dataclasses import dataclass, replace
from typing import Tuple


# ==================== ЛОГИРОВАНИЕ ====================
LOG_LEVEL = os.getenv("PATHTRACER_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("PATHTRACER_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")


# ==================== РАЗРЕШЕНИЕ ПО УМОЛЧАНИЮ ====================
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 225   # 16:9


@dataclass(frozen=True)
class RenderConfig:
    """Параметры рендеринга. Значения по умолчанию дают демонстрационную сцену."""

    # --- Параметры рендеринга ---
    width: int = DEFAULT_WIDTH          # ширина изображения
    height: int = DEFAULT_HEIGHT        # высота изображения
    samples_per_pixel: int = 50         # сэмплов на пиксель (больше = меньше шума)
    max_depth: int = 20                 # максимальная глубина трассировки

    # --- Камера ---
    look_from: Tuple[float, float, float] = (13.0, 2.0, 3.0)   # позиция камеры
    look_at: Tuple[float, float, float] = (0.0, 0.0, 0.0)      # точка, куда смотрит камера
    vup: Tuple[float, float, float] = (0.0, 1.0, 0.0)          # вектор "вверх"
    vfov: float = 20.0                  # угол обзора по вертикали (градусы)
    aperture: float = 0.1               # диаметр линзы
    focus_dist: float = 10.0            # расстояние до плоскости фокуса

    # --- Вывод ---
    output: str = "output.ppm"

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def with_resolution(self, width: int, height: int) -> "RenderConfig":
        return replace(self, width=width, height=height)
