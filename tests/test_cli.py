"""Tests for the command-line interface."""

import numpy as np
import pytest

from galaxy_cloud.cli.main import main
from galaxy_cloud.io.cloud_io import load_cloud


def test_generate_command(tmp_path, capsys):
    output = tmp_path / "galaxy.npz"

    main(['generate', '--count', '500', '--branches', '3', '--seed', '4',
          '--color-inside', '#ffffff', '--output', str(output)])

    cloud = load_cloud(str(output))
    assert len(cloud) == 500
    assert cloud.params.branches == 3
    assert cloud.params.color_inside == (1.0, 1.0, 1.0)
    assert "Generated 500 particles" in capsys.readouterr().out


def test_generate_is_reproducible(tmp_path):
    first = tmp_path / "a.npz"
    second = tmp_path / "b.npz"

    main(['generate', '--count', '300', '--seed', '9', '--workers', '2', '--output', str(first)])
    main(['generate', '--count', '300', '--seed', '9', '--output', str(second)])

    assert np.array_equal(load_cloud(str(first)).positions, load_cloud(str(second)).positions)


def test_invalid_parameter_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['generate', '--radius', '0', '--output', str(tmp_path / "x.npz")])

    assert excinfo.value.code == 2
    assert "radius" in capsys.readouterr().err


def test_gif_command(tmp_path):
    pytest.importorskip("imageio")
    output = tmp_path / "spin.gif"

    main(['gif', '--count', '200', '--seed', '1', '--fps', '4', '--duration', '0.5',
          '--output', str(output)])

    assert output.stat().st_size > 0
