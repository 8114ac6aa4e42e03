"""Plotting, validation and path helpers for experiment scripts."""

from pathlib import Path

from .frame_plotter import FramePlotter
from .poisson_validator import PoissonValidator, build_clamped_laplacian


def get_project_root():
    """Return the repository root (the first parent holding pyproject.toml)."""
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    return Path.cwd()


__all__ = [
    "get_project_root",
    "FramePlotter",
    "PoissonValidator",
    "build_clamped_laplacian",
]
