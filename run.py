#!/usr/bin/env python3
"""
Lead Mapper - Entry Point

Usage:
    python run.py extract FILES...   # Extract, filter and export
    python run.py config             # Show configuration status
    python run.py version            # Show version
"""

from leadmapper.cli import main

if __name__ == '__main__':
    main()
