"""
Entry point for python -m loglyzer
"""

from .main import main

if __name__ == "__main__":
    main()
