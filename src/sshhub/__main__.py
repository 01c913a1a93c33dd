"""Entry point for running sshhub as a module.

This allows running the CLI with:
    python -m sshhub
"""

from sshhub.cli.main import main

if __name__ == "__main__":
    main()
