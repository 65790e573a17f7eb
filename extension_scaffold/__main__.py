import sys

from extension_scaffold.cli import main

sys.exit(main())
