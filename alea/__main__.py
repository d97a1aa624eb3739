"""
Alea Module Entry Point
========================

Allows running the Alea CLI via: python -m alea
"""

from alea.cli import main

if __name__ == "__main__":
    main()
