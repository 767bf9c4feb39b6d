import sys

from pagesplit.main import main

sys.exit(main())
