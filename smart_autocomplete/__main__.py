import sys

from smart_autocomplete.cli import main

sys.exit(main())
