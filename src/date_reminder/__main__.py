import sys

from date_reminder.main import main

sys.exit(main())
