"""Entry point for running SchoolDesk as a module.

This file allows SchoolDesk to be run with: python -m schooldesk
"""

from schooldesk.app import main

if __name__ == "__main__":
    main()
