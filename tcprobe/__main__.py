"""
Main entry point for tcprobe.
"""
import sys

from tcprobe.app import main

if __name__ == "__main__":
    sys.exit(main())
