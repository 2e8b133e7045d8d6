"""Allow ``python -m album_importer.cli``."""

from .main import main

if __name__ == "__main__":
    main()
