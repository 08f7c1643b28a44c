# tokencli/main.py


import typer
from tokencli.auth.commands import app as auth_app

app = typer.Typer()
app.add_typer(auth_app, name="auth")

if __name__ == "__main__":
    app()
