"""
Lets `python -m loxscript` behave just like the `loxscript` console script.
"""
from .cmdline import main

main()
