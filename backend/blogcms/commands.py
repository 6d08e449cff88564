import click
from flask.cli import with_appcontext

from blogcms.application.users.accounts import create_user
from blogcms.domain.exceptions import CMSError


@click.command("create-admin")
@click.option("--email", prompt=True)
@click.option("--first-name", prompt=True)
@click.option("--last-name", prompt=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--role", default="superadmin", type=click.Choice(["admin", "superadmin"]))
@with_appcontext
def create_admin(email, first_name, last_name, password, role):
    """Create an administrator account."""
    try:
        user = create_user(
            actor=None,
            data={
                "email": email,
                "firstName": first_name,
                "lastName": last_name,
                "password": password,
                "role": role,
            },
        )
    except CMSError as e:
        raise click.ClickException(e.message)

    click.echo(f"Created {user.role} {user.email} ({user.id})")
