"""
Run with: python -m beliefgraph
"""
import sys

from beliefgraph.main import main

if __name__ == "__main__":
    sys.exit(main())
