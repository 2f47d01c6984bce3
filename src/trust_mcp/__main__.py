import sys

from trust_mcp.cli import main

sys.exit(main())
