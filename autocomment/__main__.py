import sys

from autocomment.main import main

sys.exit(main())
