import sys

from .gtk3notification import main

sys.exit(main())
