"""Allow running rankgraph as ``python -m rankgraph``."""
from rankgraph.cli import main

if __name__ == "__main__":
    main()
