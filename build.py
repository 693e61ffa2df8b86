#!/usr/bin/env python3
from vibeblog.cli import main

if __name__ == "__main__":
    main()
