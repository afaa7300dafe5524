"""Enable running termprobe as a module: python -m termprobe."""

from termprobe.cli import main

if __name__ == "__main__":
    main()
