"""Entry point for running fb as a module.

This allows running the application with:
    python -m fb [OPTIONS] [COMMAND]
"""

from fb.cli import app

if __name__ == "__main__":
    app()
