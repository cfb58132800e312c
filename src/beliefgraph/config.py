"""
Configuration & Constants
=========================
This module serves as the central registry for global constants and the
tunable parameters of the force simulation.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (link distance, charge strength,
   frame interval, ...) scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find bundled sample files when the app is frozen into an .exe.

Exports:
    SimulationConfig: Frozen dataclass with the engine constants.
    CANVAS_HEIGHT (float): Fixed height of the drawing surface.
    FRAME_INTERVAL_MS (int): Timer interval of the render loop.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/beliefgraph/
    project_root: Path = Path(__file__).parent.parent.parent
    return os.path.join(str(project_root), relative_path)


@dataclass(frozen=True)
class SimulationConfig:
    """Constants of the force simulation."""
    link_distance: float = 50.0
    charge_strength: float = -100.0  # negative = repulsive
    min_distance_sq: float = 1.0  # avoids infinite repulsion of coincident nodes

    velocity_decay: float = 0.4  # fraction of velocity lost per tick
    max_speed: float = 100.0  # units per tick

    initial_temperature: float = 1.0
    temperature_min: float = 0.001
    temperature_decay: float = 1.0 - 0.001 ** (1.0 / 300.0)
    reheat_target: float = 0.3

    # Safety valve for very wide layers, None = complete bipartite links
    max_links: Optional[int] = None

    seed: int = 0


# Global Constants
CANVAS_HEIGHT: float = 300.0
DEFAULT_CANVAS_WIDTH: float = 600.0
FRAME_INTERVAL_MS: int = 16  # ~60 FPS

NODE_RADIUS: float = 8.0
LINK_COLOR: str = "#475569"
LINK_OPACITY: float = 0.6
LINK_WIDTH: float = 1.0
BACKGROUND_COLOR: str = "#1e293b"

COLOR_MAP_NAME: str = "RdYlGn"

SAMPLES_PATH: str = get_resource_path("samples")
