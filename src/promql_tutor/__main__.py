"""Entry point for ``python -m promql_tutor``."""

from promql_tutor import cli


if __name__ == "__main__":
    cli.main()
