import sys

from aquamarine.cli import main

sys.exit(main())
