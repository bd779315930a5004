import sys

from sprite_toolkit.cli import main

sys.exit(main())
