"""
Path Tracer - Синтез изображений методом трассировки путей.

Сцена из сфер с диффузными, металлическими и стеклянными материалами.

Запуск: python main.py [ширина высота]
Результат: output.ppm в текущем каталоге.
"""

import argparse
import logging
import sys

from pathtracer.camera import Camera
from pathtracer.config import RenderConfig, DEFAULT_WIDTH, DEFAULT_HEIGHT
from pathtracer.logging_config import setup_logging
from pathtracer.postprocess import to_8bit, save_ppm
from pathtracer.random_scene import random_scene
from pathtracer.renderer import render


logger = logging.getLogger("pathtracer.main")


def parse_resolution(argv):
    """
    Разрешение из аргументов командной строки.

    Ровно два целых числа - ширина и высота; иначе 400x225.
    """
    parser = argparse.ArgumentParser(description="Трассировщик путей для сцены из сфер",
                                     add_help=False)
    parser.add_argument("size", nargs="*", metavar="N", help="ширина и высота изображения")
    args, unknown = parser.parse_known_args(argv)

    # Флаги не принимаются: только ровно два позиционных аргумента
    if len(args.size) == 2 and not unknown:
        try:
            return int(args.size[0]), int(args.size[1])
        except ValueError:
            pass

    logger.debug("Разрешение не задано или некорректно: %s", argv)
    return DEFAULT_WIDTH, DEFAULT_HEIGHT


def main(argv=None):
    """Основная функция рендеринга."""
    if argv is None:
        argv = sys.argv[1:]

    setup_logging()

    width, height = parse_resolution(argv)
    config = RenderConfig().with_resolution(width, height)

    logger.info("Rendering %dx%d image with %d samples...",
                config.width, config.height, config.samples_per_pixel)

    # 1. Сцена
    scene = random_scene()

    # 2. Камера
    camera = Camera.from_config(config)

    # 3. Рендеринг
    image = render(scene, camera, config)

    # 4. Постобработка и сохранение
    pixels = to_8bit(image, config.samples_per_pixel)
    path = save_ppm(config.output, pixels)

    logger.info("Done! Saved to: %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
