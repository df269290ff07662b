import sys

from one_take_studio.cli import main

sys.exit(main())
