# presentai/commands.py
import click

from . import db
from .storage import ensure_bucket


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all database tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("ensure-bucket")
    def ensure_bucket_command():
        """Create the storage bucket if it does not exist."""
        if ensure_bucket():
            click.echo("Storage bucket is ready.")
        else:
            raise click.ClickException("Storage is not configured.")
