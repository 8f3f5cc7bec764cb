import click

from mangashelf import create_app, db
from mangashelf.utils.logging import get_logger


app = create_app()
log = get_logger("mangashelf.cli")


def _database_uri():
    return app.config.get("SQLALCHEMY_DATABASE_URI")


@app.cli.command("init-db")
def init_db():
    """Create the user and manga tables if they are missing."""
    db.create_all()
    log.info("created tables on %s", _database_uri())
    click.echo("Database initialised.")


@app.cli.command("drop-db")
@click.confirmation_option(prompt="Drop every table? Users and manga rows will be lost.")
def drop_db():
    db.drop_all()
    log.info("dropped tables on %s", _database_uri())
    click.echo("Database dropped.")


@app.cli.command("reset-db")
@click.confirmation_option(prompt="Drop and recreate every table?")
def reset_db():
    db.drop_all()
    db.create_all()
    log.info("reset tables on %s", _database_uri())
    click.echo("Database reset.")


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=app.config.get("DEBUG", False))
