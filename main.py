"""
Main entry point for hand_pointer.

This script delegates to the application in `hand_pointer.app`.
Run `python main.py` or `python -m hand_pointer.app`.
"""

from hand_pointer.app import main

if __name__ == "__main__":
    main()
