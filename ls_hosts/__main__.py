#!/usr/bin/env python3
"""ls-hosts - list EC2 instances as a table."""

from ls_hosts.cli.main import main

if __name__ == "__main__":
    main()
