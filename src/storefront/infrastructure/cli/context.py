"""Caller identity for CLI commands.

``--user`` / ``--role`` on the root group stand in for the authentication
layer: the core trusts whatever identity they carry.
"""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import Caller


def current_caller() -> Caller:
    ctx = click.get_current_context()
    obj = ctx.find_root().obj or {}
    try:
        return Caller.of(obj.get("user"), obj.get("role", "user"))
    except DomainException as exc:
        raise click.ClickException(str(exc))
