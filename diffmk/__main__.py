import sys

from diffmk.cli import main

sys.exit(main())
