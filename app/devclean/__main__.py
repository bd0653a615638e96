"""Allow running devclean as ``python -m devclean``."""

from devclean.cli.main import app

if __name__ == "__main__":
    app()
