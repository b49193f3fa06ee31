"""Allow ``python -m satprism``."""

from satprism.cli.main import app

if __name__ == "__main__":
    app()
