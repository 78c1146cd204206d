# Copyright (c) 2026 Mark Ferrell. MIT License.
import sys

from pretag.main import main

sys.exit(main())
