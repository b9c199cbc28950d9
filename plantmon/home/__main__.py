"""Home dashboard entrypoint.

Polls the plant monitor for the latest reading and active alerts, and
notifies when the alert set changes.

Usage: python -m plantmon.home
"""

from plantmon.home.service import main

if __name__ == "__main__":
    main()
