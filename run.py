#!/usr/bin/env python3
"""
run.py - Main entry point for the Tic-Tac-Toe game

Usage:
    python run.py play [--debug | --debug_level LEVEL] [--log_file PATH]
    python run.py check --position "XO.XO.X.."
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tictactoe.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
