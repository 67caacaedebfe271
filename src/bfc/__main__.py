"""Allow ``python -m bfc`` as an alias for the ``bfc`` command."""

from bfc.cli.bfc import main

if __name__ == "__main__":
    main(prog_name="bfc")
