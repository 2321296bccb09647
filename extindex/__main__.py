import sys

from extindex.main import main

sys.exit(main())
