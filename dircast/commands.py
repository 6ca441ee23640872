import click
from flask import current_app
from flask.cli import with_appcontext

from dircast.services.search_service import search
from dircast.util.auth import load_credential_store


@click.command("search")
@click.argument("query", default="", envvar="DIRCAST_SEARCH")
@with_appcontext
def search_command(query):
    """List the objects matching QUERY in the configured bucket."""
    result = search(query, current_app.extensions["dircast.store"])
    if result.status == "skipped":
        click.echo("No bucket configured (set DIRCAST_BUCKET_NAME).", err=True)
        return
    if result.failed:
        raise click.ClickException(f"Search failed: {result.error}")
    for obj in result.objects:
        click.echo(f"* {obj.key} ({obj.size_bytes} bytes)")
    if result.dropped:
        click.echo(f"{result.dropped} objects could not be signed.", err=True)


@click.command("check-credentials")
@with_appcontext
def check_credentials_command():
    """Check that the password file can be read."""
    path = current_app.config["HTPASSWD_PATH"]
    store = load_credential_store(path)
    click.echo(f"✅ {path}: {len(store.users())} users")


def register_commands(app):
    app.cli.add_command(search_command)
    app.cli.add_command(check_credentials_command)
