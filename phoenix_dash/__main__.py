import sys

from phoenix_dash.main import main

sys.exit(main())
