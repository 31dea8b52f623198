from __future__ import annotations

import os

# telemetry configures itself on first use; keep test output quiet
os.environ.setdefault("PAIR_ENGINE_DISABLE_CONSOLE", "1")
