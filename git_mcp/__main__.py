import sys

from git_mcp.ui.cli.app import main

sys.exit(main())
