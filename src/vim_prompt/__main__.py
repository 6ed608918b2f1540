import sys

from vim_prompt.cli import main

sys.exit(main())
