import sys

from zinclha.cli import main

sys.exit(main())
