"""Basic example of generating a galaxy cloud."""

import numpy as np

from galaxy_cloud import ParameterSet, generate


def main():
    """Generate a seeded galaxy and summarize it."""
    params = ParameterSet(
        count=20000,
        radius=5.0,
        branches=3,
        spin=1.0,
        randomness=0.2,
        randomness_power=3.0,
        color_inside="#ff6030",
        color_outside="#1b3984",
    )

    cloud = generate(params, seed=42)

    radii = np.linalg.norm(cloud.positions[:, [0, 2]], axis=1)
    print(f"Generated {len(cloud)} particles on {params.branches} arms")
    print(f"Median radius: {np.median(radii):.3f} (max {params.radius})")
    print(f"Vertical spread: {cloud.positions[:, 1].std():.4f}")
    print(f"Mean color: {cloud.colors.mean(axis=0).round(3)}")


if __name__ == "__main__":
    main()
