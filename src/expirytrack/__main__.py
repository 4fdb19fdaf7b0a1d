#!/usr/bin/env python3
"""
Allow running expirytrack as a module: python -m expirytrack
"""

from expirytrack.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
