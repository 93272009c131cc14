from hostwatch.cli import app

app()
