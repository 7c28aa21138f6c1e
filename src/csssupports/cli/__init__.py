from csssupports.cli.main import cli

__all__ = ["cli"]
