import sys

from alioss.cli import main

sys.exit(main())
