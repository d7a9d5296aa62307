#!/usr/bin/env python3
from gamerack.cli import main

if __name__ == "__main__":
    main()
