import sys

from framy import main


if __name__ == '__main__':
    sys.exit(main())
