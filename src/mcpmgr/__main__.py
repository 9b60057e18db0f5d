# Allow `python -m mcpmgr`
import sys

from mcpmgr.cli import main

sys.exit(main())
