"""
__main__.py

This file adds support for running gnome-spotlight as a python module instead of invoking the
"gnome-spotlight" command line entrypoint:

    $ python -m spotlight --debug
"""

from spotlight.cli import main


if __name__ == "__main__":
    main()
