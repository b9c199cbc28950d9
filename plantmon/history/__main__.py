"""History entrypoint.

Prints the chart and summary statistics of one sensor over a time range.

Usage: python -m plantmon.history [sensor] [--range 1h|24h|Week|Month] [--watch]
"""

from plantmon.history.service import main

if __name__ == "__main__":
    main()
