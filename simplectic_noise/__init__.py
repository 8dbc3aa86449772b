from .permutation import PermutationTable, shuffle_from_seed
from .field import NoiseField, NoiseField2D, NoiseField3D, NoiseField4D, create_noise_field
from .fractal import fractal_noise

__all__ = [
    "PermutationTable",
    "shuffle_from_seed",
    "NoiseField",
    "NoiseField2D",
    "NoiseField3D",
    "NoiseField4D",
    "create_noise_field",
    "fractal_noise",
]
