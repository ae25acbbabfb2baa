import sys

from bin2fpgadata.cli import main

sys.exit(main())
