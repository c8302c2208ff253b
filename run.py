#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine

Examples:
    python run.py play --difficulty 7
    python run.py analyze --moves 3,3,2,4 --difficulty 8
    python run.py benchmark --difficulty 4 --games 3 --seed 1
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
