from easyfs.cli import app

app()
