# simplectic_noise/fractal.py

"""
================================================================================
FRACTAL NOISE
================================================================================
Layers several octaves of a noise field into fractal Brownian motion.

Data Contract:
---------------
- Inputs:
    - field: Any NoiseField.
    - coords: One array-like per field dimension.
    - octaves, persistence, lacunarity: Standard noise parameters.
- Outputs:
    - A float64 NumPy array with the broadcast shape of the coordinates.
      The sum is not renormalised, so its range grows with persistence.
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS


def fractal_noise(field, *coords, octaves: int = DEFAULTS.DEFAULT_OCTAVES,
                  persistence: float = DEFAULTS.DEFAULT_PERSISTENCE,
                  lacunarity: float = DEFAULTS.DEFAULT_LACUNARITY) -> np.ndarray:
    """
    Sums `octaves` layers of noise. Layer k is sampled at the coordinates
    scaled by lacunarity**k and weighted by persistence**k.
    """
    if octaves < 1:
        raise ValueError(f"octaves must be at least 1, got {octaves}.")

    arrays = [np.asarray(c, dtype=np.float64) for c in coords]
    total = None
    amplitude = 1.0
    frequency = 1.0
    for _ in range(octaves):
        layer = field.eval_array(*[a * frequency for a in arrays]) * amplitude
        total = layer if total is None else total + layer
        amplitude *= persistence
        frequency *= lacunarity
    return total
