import sys

from line_engine.cli import main

sys.exit(main())
