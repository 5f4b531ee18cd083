"""Package entry point for ``python -m format_hub``.

Delegates to the CLI's main(); see format_hub.cli for subcommands.
"""

from format_hub.cli import main

if __name__ == "__main__":
    main()
