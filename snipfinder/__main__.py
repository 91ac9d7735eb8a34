"""Module entrypoint for ``python -m snipfinder``."""

from .cli import main


if __name__ == "__main__":
    main()
