# render_noise.py

"""
================================================================================
NOISE RENDERING SCRIPT
================================================================================
This script is a command-line tool that samples a noise field on a regular
grid and writes it to a grayscale PNG. It only constructs a field and
evaluates it, so it doubles as a visual smoke test of the engine.

Each pixel (px, py) samples the field at (px / feature_size,
py / feature_size) plus the slice coordinate for the remaining axes, and
the value v is mapped to the byte floor((v * 0.5 + 0.5) * 255 + 0.5).

Usage:
    python render_noise.py
    python render_noise.py --config path/to/render.json --seed 42 --output out.png
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import numpy as np
from PIL import Image
from tqdm import tqdm

# Add project root to Python path to allow importing from simplectic_noise
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from simplectic_noise import create_noise_field, fractal_noise
from simplectic_noise import config as DEFAULTS


def consolidate_settings(user_config: dict) -> dict:
    """Merges a user configuration dictionary over the internal defaults."""
    return {
        'seed': user_config.get('seed', DEFAULTS.DEFAULT_SEED),
        'dimensions': user_config.get('dimensions', DEFAULTS.RENDER_DIMENSIONS),
        'width': user_config.get('width', DEFAULTS.RENDER_WIDTH),
        'height': user_config.get('height', DEFAULTS.RENDER_HEIGHT),
        'feature_size': user_config.get('feature_size', DEFAULTS.RENDER_FEATURE_SIZE),
        'slice': user_config.get('slice', DEFAULTS.RENDER_SLICE),
        'octaves': user_config.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
        'persistence': user_config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE),
        'lacunarity': user_config.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY),
        'output': user_config.get('output', DEFAULTS.RENDER_OUTPUT_PATH),
    }


def to_grayscale(values: np.ndarray) -> np.ndarray:
    """Maps noise values in [-1, 1] to bytes, rounding half up."""
    scaled = np.floor((values * 0.5 + 0.5) * 255.0 + 0.5)
    return np.clip(scaled, 0, 255).astype(np.uint8)


def render_grid(field, settings: dict, show_progress: bool = True) -> np.ndarray:
    """
    Samples the field one row at a time.

    Returns:
        np.ndarray: uint8 array of shape (height, width).
    """
    width = settings['width']
    height = settings['height']
    feature_size = settings['feature_size']
    xs = np.arange(width, dtype=np.float64) / feature_size
    # Axes beyond x and y are held at the slice coordinate.
    extra_axes = [np.full(width, settings['slice'], dtype=np.float64)] * (field.dimensions - 2)

    image = np.empty((height, width), dtype=np.uint8)
    for py in tqdm(range(height), desc="Rendering Rows", disable=not show_progress):
        ys = np.full(width, py / feature_size, dtype=np.float64)
        row = fractal_noise(
            field, xs, ys, *extra_axes,
            octaves=settings['octaves'],
            persistence=settings['persistence'],
            lacunarity=settings['lacunarity'],
        )
        image[py] = to_grayscale(row)
    return image


def render_noise(config_path: str = None, overrides: dict = None) -> int:
    """
    Loads a configuration, renders the noise image and saves it with Pillow.

    Returns:
        int: Process exit status.
    """
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Renderer")

    # 2. --- Load Configuration ---
    config = {}
    if config_path:
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, 'r') as f:
                config = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1

    # Command-line options win over the file.
    config.update({key: value for key, value in (overrides or {}).items() if value is not None})
    settings = consolidate_settings(config)

    # 3. --- Build the Field ---
    logger.info(f"Initializing {settings['dimensions']}D noise field with seed: {settings['seed']}")
    try:
        field = create_noise_field(settings['dimensions'], seed=settings['seed'], logger=logger)
    except ValueError as e:
        logger.critical(f"Invalid render settings: {e}")
        return 1

    # 4. --- Render ---
    logger.info(f"Rendering {settings['width']}x{settings['height']} image "
                f"(feature size {settings['feature_size']}, {settings['octaves']} octave(s))...")
    start_time = time.perf_counter()
    image = render_grid(field, settings)
    Image.fromarray(image).save(settings['output'])
    end_time = time.perf_counter()

    logger.info(f"Render complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"Image saved to: {settings['output']}")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Renders a grayscale PNG of OpenSimplex noise.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON file overriding the render defaults.")
    parser.add_argument("--seed", type=int, default=None, help="Permutation table seed.")
    parser.add_argument("--dimensions", type=int, choices=(2, 3, 4), default=None,
                        help="Noise dimension count. 3D and 4D sample the slice at z = w = 0.")
    parser.add_argument("--octaves", type=int, default=None, help="Number of fractal octaves.")
    parser.add_argument("--output", type=str, default=None, help="Path of the PNG to write.")
    args = parser.parse_args()

    sys.exit(render_noise(args.config, {
        'seed': args.seed,
        'dimensions': args.dimensions,
        'octaves': args.octaves,
        'output': args.output,
    }))
