"""Example with real-time rendering and parameter changes."""

from galaxy_cloud import FrameClock, GalaxyGenerator, ParameterSet, Regenerator
from galaxy_cloud.render import CloudRenderer


def main():
    """Rotate a galaxy and reshape it every few seconds."""
    regenerator = Regenerator(GalaxyGenerator(seed=123))
    renderer = CloudRenderer(max_points=30000)
    clock = FrameClock()

    params = ParameterSet(count=30000, branches=4)
    spins = [0.5, 1.25, 2.5, -1.0]

    print("Rotating galaxy; close the matplotlib window to stop.")

    try:
        frame = 0
        while frame == 0 or renderer.is_open():
            # New snapshot every 150 frames; unchanged snapshots reuse the cloud
            spin = spins[(frame // 150) % len(spins)]
            cloud = regenerator.on_parameter_change(params.replace(spin=spin))
            renderer.render(cloud, clock.orientation())
            frame += 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
    finally:
        regenerator.close()
        renderer.close()


if __name__ == "__main__":
    main()
