"""Allow ``python -m wtii``."""

from wtii.ui.app import main


if __name__ == "__main__":
    main()
