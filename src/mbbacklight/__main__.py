from __future__ import annotations

from mbbacklight.cli import main

raise SystemExit(main())
