import sys

from conv3d.cli import main

if __name__ == "__main__":
    sys.exit(main())
