import sys

from sortscope.app import main

sys.exit(main())
