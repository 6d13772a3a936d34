"""Entry point for 'python -m slatestack'."""

from slatestack.cli import main

if __name__ == "__main__":
    main()
