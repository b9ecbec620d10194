#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four console game

Usage:
    python run.py play
    python run.py test --position 0,0,...,1,2
    python run.py benchmark --iterations 500
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connect4.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
