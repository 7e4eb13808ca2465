"""Module entrypoint for ``python -m treeviewer``."""

from .cli import main


if __name__ == "__main__":
    main()
