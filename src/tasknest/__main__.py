"""Entry point for 'python -m tasknest' command."""

from tasknest.cli import main

if __name__ == "__main__":
    main()
