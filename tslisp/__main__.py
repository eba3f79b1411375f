import sys

from tslisp.cli import main

sys.exit(main())
