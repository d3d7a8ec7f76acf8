"""Module entrypoint so that ``python -m summitt`` runs the CLI."""

from summitt.cli import main

if __name__ == "__main__":
    main()
