import sys

from rds_failover.cli import main

sys.exit(main())
