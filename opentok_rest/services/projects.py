"""
Account management: the projects of an account.

These calls are authenticated with an account-scoped service JWT, so the
client must hold the account API key and secret rather than those of a
project.
"""

from typing import List, Optional

from . import transport
from .validation import require
from ..auth import scopes
from ..client import OpenTok, PROJECT_URL
from ..domain import Project, ProjectStatus, from_dict
from ..exceptions import InvalidArgument, RequestFailed


def create(client: OpenTok, name: Optional[str] = None) -> Project:
    """Create a project, with a new API key and secret."""
    body = {'name': name} if name else None
    response = client.request('POST', PROJECT_URL, scope=scopes.ACCOUNT,
                              json=body)
    return transport.load(Project, response)


def list_projects(client: OpenTok) -> List[Project]:
    """List the projects of the account."""
    response = client.request('GET', PROJECT_URL, scope=scopes.ACCOUNT)
    data = transport.decode_json(response)
    if not isinstance(data, list):
        raise RequestFailed('Expected a list of projects')
    try:
        return [from_dict(Project, item) for item in data]
    except TypeError as e:
        raise RequestFailed(f'Unexpected Project response: {e}') from e


def get(client: OpenTok, project_api_key: str) -> Project:
    """Get a project."""
    require(project_api_key, 'Cannot get project information without a'
                             ' project API key')
    response = client.request('GET', f'{PROJECT_URL}/{project_api_key}',
                              scope=scopes.ACCOUNT)
    return transport.load(Project, response)


def change_status(client: OpenTok, project_api_key: str,
                  status: str) -> Project:
    """
    Activate or suspend a project.

    A suspended project's API key, and any session created with it, cannot
    be used.
    """
    require(project_api_key, 'Project status cannot be changed without a'
                             ' project API key')
    if status not in ProjectStatus.ALL:
        raise InvalidArgument(f'Invalid project status: {status}')
    response = client.request('PUT', f'{PROJECT_URL}/{project_api_key}',
                              scope=scopes.ACCOUNT, json={'status': status})
    return transport.load(Project, response)


def refresh_secret(client: OpenTok, project_api_key: str) -> Project:
    """Generate a new API secret for a project."""
    require(project_api_key, 'Project secret cannot be refreshed without a'
                             ' project API key')
    response = client.request(
        'POST', f'{PROJECT_URL}/{project_api_key}/refreshSecret',
        scope=scopes.ACCOUNT
    )
    return transport.load(Project, response)


def delete(client: OpenTok, project_api_key: str) -> None:
    """Delete a project, disabling its API key and sessions."""
    require(project_api_key, 'Project cannot be deleted without a project'
                             ' API key')
    client.request('DELETE', f'{PROJECT_URL}/{project_api_key}',
                   scope=scopes.ACCOUNT, expected=(204,))
