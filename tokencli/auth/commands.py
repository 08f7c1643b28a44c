import getpass
import re
import typer

from tokencli.core.session import save_token, load_token, clear_token, is_logged_in
from tokencli.core.api import api_login, api_logout, api_logout_all, api_get_me


app = typer.Typer(help="Authentication commands (login, logout)")

USERNAME_REGEX = re.compile(r"^[a-zA-Z0-9_.-]{3,64}$")


@app.command("login")
def login(
    username: str = typer.Option(None, "--username", "-u", help="Username"),
):
    """
    Login to the system. Only allowed if no session is active.
    """
    # Check if session is already active
    if is_logged_in():
        typer.echo("Session already active. Logout first to remove current session token.")
        raise typer.Exit(code=1)

    if username is None:
        username = typer.prompt("Username")

    if not USERNAME_REGEX.match(username):
        typer.echo(
            "Invalid username.\n"
            "Use only letters, numbers, '.', '_' or '-', with 3 to 64 characters."
        )
        raise typer.Exit(code=1)

    password = getpass.getpass("Password: ")

    if not password:
        typer.echo("Password cannot be empty.")
        raise typer.Exit(code=1)

    # Login to backend
    result = api_login(username, password)

    if result is None:
        typer.echo("Login failed (invalid credentials or API error).")
        raise typer.Exit(code=1)

    save_token(result["access_token"], result.get("expires_at"))
    typer.echo(f"Login successful as '{username}'.")
    if result.get("expires_at"):
        typer.echo(f"Session expires at {result['expires_at']} (UTC).")


@app.command("logout")
def logout():
    """
    End session and delete local token.
    """
    token = load_token()
    if token:
        if api_logout(token):
            typer.echo("Logged out from backend.")
        else:
            typer.echo("Warning: Failed to logout from backend. The token may have had already expired.")
    
    clear_token()
    typer.echo("Session ended.")


@app.command("logout-all")
def logout_all():
    """
    Revoke every session of the current user and delete the local token.
    """
    token = load_token()
    if not token:
        typer.echo("No active session.")
        raise typer.Exit(code=1)

    revoked = api_logout_all(token)
    if revoked is None:
        typer.echo("Failed to revoke sessions (token invalid or API error).")
        raise typer.Exit(code=1)

    clear_token()
    typer.echo(f"Revoked {revoked} session(s).")


@app.command("whoami")
def whoami():
    """
    Show the account of the current session.
    """
    token = load_token()
    if not token:
        typer.echo("No active session.")
        raise typer.Exit(code=1)

    user = api_get_me(token)
    if user is None:
        typer.echo("Session is no longer valid. Login again.")
        raise typer.Exit(code=1)

    role = "admin" if user.get("is_admin") else "user"
    typer.echo(f"{user['username']} (id={user['id']}, {role})")
