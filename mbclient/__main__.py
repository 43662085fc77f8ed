import sys

from mbclient.cli import main

sys.exit(main())
