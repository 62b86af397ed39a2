"""
Lets `python -m ori program.json` work the same as the `ori` command.
"""
from ori.cmdline import main

main()
