"""Run with: python -m dumbjshell"""

from dumbjshell.cli import main

main()
