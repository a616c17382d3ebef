# path: sheet_publisher/__main__.py
from sheet_publisher.main import cli

cli()
