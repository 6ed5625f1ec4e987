import sys

from wastesim.runner import main

sys.exit(main())
