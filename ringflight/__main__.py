import sys

from ringflight.cli import main

sys.exit(main())
