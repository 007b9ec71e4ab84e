import sys

from springs.cli import main

sys.exit(main())
