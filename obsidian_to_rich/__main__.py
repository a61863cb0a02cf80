import sys

from obsidian_to_rich.cli import main

sys.exit(main())
