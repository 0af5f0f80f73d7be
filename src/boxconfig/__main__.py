import sys

from boxconfig.cli import main

sys.exit(main())
