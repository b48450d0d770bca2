"""Recording sessions to archives, and managing archive storage."""

import logging
from typing import Optional

from . import transport
from .validation import check_layout, check_resolution, require
from ..client import OpenTok
from ..domain import Archive, ArchiveList, ArchiveListOptions, \
    ArchiveOptions, AmazonS3Config, AzureConfig, Layout, OutputMode, \
    StorageOptions, StorageType, to_dict
from ..exceptions import InvalidArgument

logger = logging.getLogger(__name__)


def start(client: OpenTok, session_id: str,
          options: Optional[ArchiveOptions] = None) -> Archive:
    """
    Start recording a session.

    At least one client must be connected to the session, and the session
    must use the OpenTok Media Router.

    Parameters
    ----------
    client : :class:`.OpenTok`
    session_id : str
    options : :class:`.ArchiveOptions`

    Returns
    -------
    :class:`.Archive`

    Raises
    ------
    :class:`InvalidArgument`
        Raised if the layout, output mode or resolution is invalid.

    """
    require(session_id, 'Archive cannot be started without a session ID')
    if options is None:
        options = ArchiveOptions()
    if options.layout is not None:
        check_layout(options.layout)
    if options.output_mode and options.output_mode not in OutputMode.ALL:
        raise InvalidArgument(f'Invalid output mode: {options.output_mode}')
    check_resolution(options.resolution)

    body = dict(sessionId=session_id, **to_dict(options))
    response = client.request('POST', client.project_path('archive'),
                              json=body)
    archive: Archive = transport.load(Archive, response)
    logger.debug('Started archive %s of session %s', archive.id, session_id)
    return archive


def stop(client: OpenTok, archive_id: str) -> Archive:
    """Stop recording an archive."""
    require(archive_id, 'Archive cannot be stopped without an archive ID')
    response = client.request(
        'POST', client.project_path('archive', archive_id, 'stop')
    )
    return transport.load(Archive, response)


def list_archives(client: OpenTok,
                  options: Optional[ArchiveListOptions] = None) \
        -> ArchiveList:
    """List archives of the project, newest first."""
    if options is None:
        options = ArchiveListOptions()
    params = {}
    if options.offset:
        params['offset'] = options.offset
    if options.count:
        params['count'] = options.count
    if options.session_id:
        params['sessionId'] = options.session_id
    response = client.request('GET', client.project_path('archive'),
                              params=params)
    return transport.load(ArchiveList, response)


def get(client: OpenTok, archive_id: str) -> Archive:
    """Get an archive."""
    require(archive_id, 'Cannot get archive information without an'
                        ' archive ID')
    response = client.request('GET',
                              client.project_path('archive', archive_id))
    return transport.load(Archive, response)


def delete(client: OpenTok, archive_id: str) -> None:
    """Delete an archive."""
    require(archive_id, 'Archive cannot be deleted without an archive ID')
    client.request('DELETE', client.project_path('archive', archive_id),
                   expected=(204,))


def set_storage(client: OpenTok, options: StorageOptions) -> StorageOptions:
    """
    Upload completed archives to Amazon S3 or Microsoft Azure.

    Raises
    ------
    :class:`InvalidArgument`
        Raised if the storage type is unsupported, or a required field of its
        config is empty.

    """
    config = options.config
    if options.type == StorageType.S3 and isinstance(config, AmazonS3Config):
        require(config.access_key, 'The Amazon Web Services access key'
                                   ' cannot be empty')
        require(config.secret_key, 'The Amazon Web Services secret key'
                                   ' cannot be empty')
        require(config.bucket, 'The S3 bucket name cannot be empty')
    elif options.type == StorageType.AZURE \
            and isinstance(config, AzureConfig):
        require(config.account_name, 'The Microsoft Azure account name'
                                     ' cannot be empty')
        require(config.account_key, 'The Microsoft Azure account key'
                                    ' cannot be empty')
        require(config.container, 'The Microsoft Azure container name'
                                  ' cannot be empty')
    else:
        raise InvalidArgument('Archive storage must be an Amazon S3 or'
                              ' Microsoft Azure config')

    response = client.request('PUT',
                              client.project_path('archive', 'storage'),
                              json=to_dict(options))
    return transport.load(StorageOptions, response)


def delete_storage(client: OpenTok) -> None:
    """Remove the archive upload target."""
    client.request('DELETE', client.project_path('archive', 'storage'),
                   expected=(204,))


def set_layout(client: OpenTok, archive_id: str, layout: Layout) -> Archive:
    """Change the layout of a composed archive while it is recording."""
    require(archive_id, 'Cannot change the layout of an archive without an'
                        ' archive ID')
    check_layout(layout)
    response = client.request(
        'PUT', client.project_path('archive', archive_id, 'layout'),
        json=to_dict(layout)
    )
    return transport.load(Archive, response)
