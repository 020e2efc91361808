"""Saving and loading generated point clouds."""

import numpy as np
import json
import logging
from pathlib import Path

from galaxy_cloud.generator import PointCloud
from galaxy_cloud.params import ParameterSet

logger = logging.getLogger(__name__)


def save_cloud(cloud: PointCloud, output_path: str):
    """Save a point cloud and the parameters that produced it.

    Args:
        cloud: Point cloud to save
        output_path: Output file path (.npz or .json)
    """
    output_path = Path(output_path)
    params = cloud.params.to_dict()

    if output_path.suffix == '.npz':
        # NumPy compressed format; parameters stored as scalar entries
        save_dict = {
            'positions': cloud.positions,
            'colors': cloud.colors,
        }
        for key, value in params.items():
            save_dict[f'param_{key}'] = value
        np.savez_compressed(output_path, **save_dict)

    elif output_path.suffix == '.json':
        # JSON format (less efficient but human-readable)
        data = {
            'positions': cloud.positions.tolist(),
            'colors': cloud.colors.tolist(),
            'params': params,
        }
        with open(output_path, 'w') as f:
            json.dump(data, f)

    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")

    logger.info(f"Saved {len(cloud)} particles to {output_path}")


def load_cloud(input_path: str) -> PointCloud:
    """Load a point cloud written by save_cloud.

    Args:
        input_path: Input file path

    Returns:
        PointCloud with read-only float32 buffers
    """
    input_path = Path(input_path)

    if input_path.suffix == '.npz':
        with np.load(input_path) as data:
            positions = data['positions']
            colors = data['colors']
            params = {
                key[len('param_'):]: data[key].item()
                for key in data.files if key.startswith('param_')
            }

    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            data = json.load(f)
        positions = np.array(data['positions'], dtype=np.float32)
        colors = np.array(data['colors'], dtype=np.float32)
        params = data.get('params', {})

    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")

    if positions.shape != colors.shape:
        raise ValueError(f"Mismatched buffers: positions {positions.shape}, colors {colors.shape}")

    positions = np.asarray(positions, dtype=np.float32).reshape(-1, 3)
    colors = np.asarray(colors, dtype=np.float32).reshape(-1, 3)
    positions.flags.writeable = False
    colors.flags.writeable = False
    return PointCloud(positions=positions, colors=colors, params=ParameterSet.from_dict(params))
