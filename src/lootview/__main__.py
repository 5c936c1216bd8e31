import sys

from lootview.main import main

sys.exit(main())
