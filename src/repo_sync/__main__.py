from repo_sync.cli import cli

cli()
