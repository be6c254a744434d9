"""Game objects, keyframed motion, effects and collision tests for small 3D arcade games."""

__version__ = "0.1.0"

__all__ = [
    "billboard",
    "character",
    "collision",
    "effect_generator",
    "enemy",
    "fade",
    "geometry",
    "models",
    "motion",
    "motion_data",
    "objects",
    "obstacles",
    "particles",
    "sprites",
]