"""
So that `python -m treelox program.lox` works.
"""
from .cmdline import main

main()
