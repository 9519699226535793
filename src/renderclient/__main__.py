"""
Run with: python -m renderclient
"""
from renderclient.main import main

if __name__ == "__main__":
    main()
