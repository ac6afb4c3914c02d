"""Entry point for 'python -m promptgate'."""

from promptgate.cli import main

if __name__ == "__main__":
    main()
