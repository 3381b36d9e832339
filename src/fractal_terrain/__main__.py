"""Allow running as ``python -m fractal_terrain``."""

from .cli import main

if __name__ == "__main__":
    main()
