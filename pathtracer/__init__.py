"""Трассировщик путей для сцен из сфер (numpy + numba)."""

from .camera import Camera
from .config import RenderConfig
from .materials import Dielectric, Lambertian, Metal
from .random_scene import random_scene
from .renderer import render, trace_ray
from .scene import Intersection, Scene, Sphere

__all__ = [
    "Camera",
    "RenderConfig",
    "Lambertian",
    "Metal",
    "Dielectric",
    "random_scene",
    "render",
    "trace_ray",
    "Intersection",
    "Scene",
    "Sphere",
]
