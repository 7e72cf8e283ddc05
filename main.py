import sys

from kumiki.cli import main


if __name__ == "__main__":
    sys.exit(main())

# Usage:
# python main.py 'ul>li.item$*3'
