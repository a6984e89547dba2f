import sys

from perplexity_search.cli import main

sys.exit(main())
