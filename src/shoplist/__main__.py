"""Allow ``python -m shoplist``."""

from shoplist.cli import main

main()
