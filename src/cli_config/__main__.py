"""Allow running as `python -m cli_config`."""

from cli_config.cli import main

if __name__ == "__main__":
    main()
