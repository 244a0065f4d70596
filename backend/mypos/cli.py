# Overview: Flask CLI command groups for inspecting accounts and the catalogue.

# backend/mypos/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# Accounts:
# - python -m flask users list
#   List the accounts the app will accept (id, username, role).
# - python -m flask users hash-password --password "s3cret"
#   Print a bcrypt hash to paste into POS_USERS.
#
# Catalogue:
# - python -m flask catalog list
#   List the products the app starts with (demo catalogue when SEED_DEMO_DATA is on).

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import get_stores
from .services.auth_service import hash_password


@click.group('users')
def users_group():
    """Account inspection commands."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List configured accounts."""
    users = get_stores().users.list_all()
    if not users:
        click.echo("No users configured.")
        return
    for user in users:
        click.echo(f"{user.id}\t{user.username}\t{user.role}")


@users_group.command('hash-password')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def hash_password_command(password):
    """Print a bcrypt hash for a POS_USERS entry."""
    click.echo(hash_password(password, rounds=current_app.config["BCRYPT_ROUNDS"]))


@click.group('catalog')
def catalog_group():
    """Catalogue inspection commands."""


@catalog_group.command('list')
@with_appcontext
def list_catalog():
    """List products loaded at startup."""
    products = get_stores().products.list_all()
    if not products:
        click.echo("Catalogue is empty.")
        return
    for p in products:
        click.echo(f"{p.id}\t{p.sku}\t{p.name}\t{p.category}\tstock={p.stock}\tprice={p.price_cents / 100:.2f}")


def register_commands(app):
    app.cli.add_command(users_group)
    app.cli.add_command(catalog_group)
