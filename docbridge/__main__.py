"""
Usage:
    python -m docbridge create-indexes
    python -m docbridge --config docbridge.yaml list-models
"""
from docbridge.cli.docbridgectl import main


if __name__ == "__main__":
    main()
