import sys

from pipesplit.shell import main

sys.exit(main())
