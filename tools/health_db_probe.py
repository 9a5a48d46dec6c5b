import click
from sqlalchemy import text
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from orient import create_app
from orient.extensions import db
from orient.integrations.storage.factory import storage_health


def _safe_uri(uri: str) -> str:
    if not uri:
        return "unknown"
    try:
        return make_url(uri).render_as_string(hide_password=True)
    except ArgumentError:
        return "unknown"


@click.command()
def main():
    """Print the resolved database URI, run SELECT 1 and report storage config."""
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
        click.echo(f"SQLALCHEMY_DATABASE_URI: {_safe_uri(uri)}")
        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            click.echo("SELECT 1: success")
        except SQLAlchemyError as e:
            click.echo("SELECT 1: fail")
            msg = str(e)
            if msg:
                msg = (msg[:300] + "...") if len(msg) > 300 else msg
                click.echo(f"error: {msg}")
        storage = storage_health()
        click.echo(f"object storage: {storage['provider']} ({storage['status']})")
        for name in storage["missing"]:
            click.echo(f"missing: {name}")


if __name__ == "__main__":
    main()
