"""
Helper command for generating tokens.

Use the same API key and secret as your application. Set
``OPENTOK_API_KEY`` and ``OPENTOK_API_SECRET`` in your environment, or pass
``--api-key`` and ``--api-secret``.

.. code-block:: bash

   $ opentok-token jwt --scope account
   eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJpc3MiOiI0MDAwMDAwMSIsImlhdCI6...

   $ opentok-token connection 1_MX40MDAwMDAwMX5-MTU3Nzg2NTYwMDAwMH54N2I0OE1RZ0RmK1lRRnFQUWg4dlZmT0t-QX4 \
       --role moderator --data name=Jane --layout-class focus
   T1==cGFydG5lcl9pZD00MDAwMDAwMSZzaWc9...

The service JWT can be sent in the ``X-OPENTOK-AUTH`` header of requests to
the REST API, e.g. with ``curl``. It expires after five minutes.
"""

import logging
from typing import Optional, Tuple

import click

from .auth import access, scopes, tokens
from .domain import Credential, Role, TokenOptions
from .exceptions import InvalidArgument, Unauthorized


@click.group()
@click.option('--api-key', envvar='OPENTOK_API_KEY',
              help='Project API key [env: OPENTOK_API_KEY]')
@click.option('--api-secret', envvar='OPENTOK_API_SECRET',
              help='Project API secret [env: OPENTOK_API_SECRET]')
@click.option('--debug', is_flag=True, help='Log at DEBUG level.')
@click.pass_context
def main(ctx: click.Context, api_key: Optional[str],
         api_secret: Optional[str], debug: bool) -> None:
    """Generate tokens for the OpenTok API."""
    if debug:
        logging.basicConfig(level=logging.DEBUG)
    ctx.obj = (api_key, api_secret)


def _get_credential(ctx: click.Context) -> Credential:
    api_key, api_secret = ctx.obj
    if not api_key or not api_secret:
        raise click.UsageError('An API key and secret are required', ctx=ctx)
    return Credential(api_key, api_secret)


@main.command()
@click.option('--scope', type=click.Choice(scopes.ALL),
              default=scopes.PROJECT, show_default=True)
@click.pass_context
def jwt(ctx: click.Context, scope: str) -> None:
    """Print a service JWT for the REST API."""
    click.echo(tokens.issue(_get_credential(ctx), scope))


@main.command()
@click.argument('session_id')
@click.option('--role', type=click.Choice(Role.ALL), default=Role.PUBLISHER,
              show_default=True)
@click.option('--data', default='', help='Connection data.')
@click.option('--expire-time', type=int, default=None,
              help='Expiration, in seconds since epoch.')
@click.option('--layout-class', 'layout_classes', multiple=True,
              help='Initial layout class; may be repeated.')
@click.pass_context
def connection(ctx: click.Context, session_id: str, role: str, data: str,
               expire_time: Optional[int],
               layout_classes: Tuple[str, ...]) -> None:
    """Print a connection token for a participant of SESSION_ID."""
    credential = _get_credential(ctx)
    options = TokenOptions(role=role, data=data, expire_time=expire_time,
                           initial_layout_class_list=layout_classes)
    try:
        token = access.generate(credential, session_id, options)
    except (InvalidArgument, Unauthorized) as e:
        raise click.ClickException(str(e)) from e
    click.echo(token)


if __name__ == '__main__':
    main()
