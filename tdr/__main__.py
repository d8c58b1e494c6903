import sys

from tdr.cli.main import main

sys.exit(main())
