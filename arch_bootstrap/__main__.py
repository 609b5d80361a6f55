from __future__ import annotations

from arch_bootstrap.main import main

if __name__ == "__main__":
    raise SystemExit(main())
