import json

import numpy as np
import pytest
from PIL import Image

import render_noise
from simplectic_noise import NoiseField3D, config as DEFAULTS, create_noise_field


def _write_config(tmp_path, **values):
    path = tmp_path / "render.json"
    path.write_text(json.dumps(values))
    return str(path)


def test_grayscale_mapping():
    values = np.array([-1.0, 0.0, 1.0, 0.5, 2.0, -2.0])
    assert render_noise.to_grayscale(values).tolist() == [0, 128, 255, 191, 255, 0]
    assert render_noise.to_grayscale(values).dtype == np.uint8


def test_settings_fall_back_to_defaults():
    settings = render_noise.consolidate_settings({})
    assert settings['width'] == DEFAULTS.RENDER_WIDTH == 512
    assert settings['height'] == DEFAULTS.RENDER_HEIGHT == 512
    assert settings['feature_size'] == DEFAULTS.RENDER_FEATURE_SIZE == 12.0
    assert settings['dimensions'] == 3
    assert settings['slice'] == 0.0
    assert settings['octaves'] == 1
    assert settings['seed'] == DEFAULTS.DEFAULT_SEED
    assert settings['output'] == "noise.png"


def test_settings_take_user_values():
    settings = render_noise.consolidate_settings({'seed': 9, 'width': 64, 'octaves': 4})
    assert settings['seed'] == 9
    assert settings['width'] == 64
    assert settings['octaves'] == 4
    assert settings['height'] == DEFAULTS.RENDER_HEIGHT


def test_render_grid_samples_feature_grid():
    field = NoiseField3D(seed=4)
    settings = render_noise.consolidate_settings({'width': 16, 'height': 8, 'feature_size': 4.0})
    image = render_noise.render_grid(field, settings, show_progress=False)
    assert image.shape == (8, 16)
    assert image.dtype == np.uint8
    expected = render_noise.to_grayscale(field.eval_array([5 / 4.0], [3 / 4.0], [0.0]))
    assert image[3, 5] == expected[0]


@pytest.mark.parametrize("dimensions", [2, 4])
def test_render_grid_other_dimensions(dimensions):
    field = create_noise_field(dimensions, seed=4)
    settings = render_noise.consolidate_settings({'width': 6, 'height': 5, 'dimensions': dimensions})
    image = render_noise.render_grid(field, settings, show_progress=False)
    assert image.shape == (5, 6)


def test_render_writes_png(tmp_path):
    output = tmp_path / "out.png"
    config_path = _write_config(tmp_path, width=12, height=7, seed=3, output=str(output))
    assert render_noise.render_noise(config_path) == 0
    with Image.open(output) as image:
        assert image.size == (12, 7)
        assert image.mode == "L"


def test_overrides_win_over_config(tmp_path):
    from_file = tmp_path / "from_file.png"
    from_option = tmp_path / "from_option.png"
    config_path = _write_config(tmp_path, width=4, height=4, output=str(from_file))
    status = render_noise.render_noise(config_path, {'output': str(from_option), 'seed': None})
    assert status == 0
    assert from_option.exists()
    assert not from_file.exists()


def test_missing_config_fails(tmp_path):
    assert render_noise.render_noise(str(tmp_path / "absent.json")) == 1


def test_malformed_config_fails(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert render_noise.render_noise(str(path)) == 1


def test_unsupported_dimensions_fail(tmp_path):
    config_path = _write_config(tmp_path, width=4, height=4, dimensions=7,
                                output=str(tmp_path / "never.png"))
    assert render_noise.render_noise(config_path) == 1
