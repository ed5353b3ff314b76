"""
2D Boids Arena
==============

A flock of boids steering inside a bordered arena, scattering away from
the mouse pointer.

Usage:
    python main.py              # Random flock
    python main.py --seed 42    # Reproducible starting flock

Controls:
    - Mouse: Boids flee the pointer
    - SPACE: Pause/Resume simulation
    - R: Reset flock
    - H: Toggle help text
    - ESC: Quit
"""

import argparse

from core import Application


def main(argv=None):
    parser = argparse.ArgumentParser(description="2D boids flocking demo")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the initial flock")
    args = parser.parse_args(argv)

    app = Application(seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
