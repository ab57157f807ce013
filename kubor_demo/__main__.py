"""Module entrypoint for `python -m kubor_demo`."""

from kubor_demo.main import main

main()
