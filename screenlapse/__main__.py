import sys

from screenlapse.main import main

sys.exit(main())
