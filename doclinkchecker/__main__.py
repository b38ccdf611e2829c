from doclinkchecker.cli import app

app()
