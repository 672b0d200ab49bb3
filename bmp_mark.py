#!/usr/bin/env python3
from bmpmark.app.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
