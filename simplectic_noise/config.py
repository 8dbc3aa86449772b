# simplectic_noise/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the noise
engine and for the rendering script. These values are used if they are not
explicitly provided by the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC RENDER.
Instead, pass a configuration dictionary (or command-line options) to the
consumer, which consolidates it over these defaults.
================================================================================
"""

# --- Permutation Table ---
# Seed used when a noise field is constructed without one.
DEFAULT_SEED = 0
# Number of entries in a permutation table. Every lattice coordinate is
# masked with (PERMUTATION_SIZE - 1) before it is used as an index.
PERMUTATION_SIZE = 256

# --- Seed Shuffle (64-bit linear congruential generator) ---
# seed = seed * LCG_MULTIPLIER + LCG_INCREMENT, wrapped to a signed 64-bit value.
LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1442695040888963407
# Steps taken before the shuffle starts, to decorrelate low-quality seed bits.
LCG_WARMUP_STEPS = 3
# Offset added to the generator state before reducing it to a table index.
LCG_SEED_OFFSET = 31

# --- Fractal Sampling ---
DEFAULT_OCTAVES = 1
DEFAULT_PERSISTENCE = 0.5
DEFAULT_LACUNARITY = 2.0

# --- Rendering ---
# Matches the reference image: 512x512 pixels, one lattice unit every 12 pixels,
# sampled on the z = 0 slice of the 3D field.
RENDER_WIDTH = 512
RENDER_HEIGHT = 512
RENDER_FEATURE_SIZE = 12.0
RENDER_DIMENSIONS = 3
RENDER_SLICE = 0.0
RENDER_OUTPUT_PATH = "noise.png"
