"""Allow ``python -m fullstack_scaffold``."""

from fullstack_scaffold.cli import main

if __name__ == "__main__":
    main()
