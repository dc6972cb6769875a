import sys

from tf_schema_diff.cli.main import main

sys.exit(main())
