import sys

from dccseeder.cli import main

sys.exit(main())
