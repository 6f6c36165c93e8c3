"""Allow ``python -m x86_toolchain``."""

from x86_toolchain.cli import main

main()
