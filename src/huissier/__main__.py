"""
Run Huissier API server: python -m huissier
"""

from huissier.main import run

if __name__ == "__main__":
    run()
