"""Command-line entry point: `python -m cryptarithm`."""

from cryptarithm import main

main()
