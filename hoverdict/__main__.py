import sys

from hoverdict.cli import main

sys.exit(main())
