"""
Entry point: python -m jwt_decode [token] [options]
"""

from .cli import main

if __name__ == "__main__":
    main()
