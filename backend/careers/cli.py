import click
from careers.application.careers.companies import create_company, set_access_code
from careers.domain.invariants.exceptions import InvariantViolation, PersistenceError


def register_cli(app):
    @app.cli.command("create-company")
    @click.option("--slug", required=True, help="URL slug, e.g. acme")
    @click.option("--name", required=True, help="Display name")
    @click.option("--access-code", required=True, prompt=True, hide_input=True,
                  confirmation_prompt=True, help="Code editors log in with")
    def create_company_command(slug, name, access_code):
        """Register a company and its empty careers page."""
        try:
            company = create_company(slug=slug, name=name, access_code=access_code)
        except (InvariantViolation, PersistenceError) as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Created company {company.slug} ({company.id})")

    @app.cli.command("set-access-code")
    @click.option("--slug", required=True)
    @click.option("--access-code", required=True, prompt=True, hide_input=True,
                  confirmation_prompt=True)
    def set_access_code_command(slug, access_code):
        """Rotate a company's access code."""
        try:
            company = set_access_code(slug=slug, access_code=access_code)
        except (InvariantViolation, PersistenceError) as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Access code updated for {company.slug}")
