"""Defines the data exchanged with the OpenTok REST API."""

from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Union, \
    get_args, get_origin, get_type_hints
from datetime import datetime


class Role:
    """Roles that a connection token can grant to a client."""

    PUBLISHER = 'publisher'
    """Can publish streams, subscribe to streams, and signal."""

    SUBSCRIBER = 'subscriber'
    """Can only subscribe to streams."""

    MODERATOR = 'moderator'
    """
    Has publisher privileges, and can also force other clients to unpublish
    or to disconnect.
    """

    ALL = (PUBLISHER, SUBSCRIBER, MODERATOR)


class ArchiveMode:
    """Whether a session is archived automatically."""

    ALWAYS = 'always'
    MANUAL = 'manual'


class MediaMode:
    """How a session transmits media (the ``p2p.preference`` parameter)."""

    RELAYED = 'enabled'
    """Clients attempt to send streams directly to each other."""

    ROUTED = 'disabled'
    """Streams go through the OpenTok Media Router."""


class LayoutType:
    """Layout types for composed archives and broadcasts."""

    BEST_FIT = 'bestFit'
    PIP = 'pip'
    VERTICAL_PRESENTATION = 'verticalPresentation'
    HORIZONTAL_PRESENTATION = 'horizontalPresentation'
    CUSTOM = 'custom'
    """Layout defined by a stylesheet. Requires :attr:`Layout.stylesheet`."""

    ALL = (BEST_FIT, PIP, VERTICAL_PRESENTATION, HORIZONTAL_PRESENTATION,
           CUSTOM)


class OutputMode:
    """Whether an archive is one composed file or one file per stream."""

    COMPOSED = 'composed'
    INDIVIDUAL = 'individual'

    ALL = (COMPOSED, INDIVIDUAL)


class Resolution:
    """Archive and broadcast resolutions."""

    SD = '640x480'
    HD = '1280x720'

    ALL = (SD, HD)


class StorageType:
    """Upload targets for completed archives."""

    S3 = 's3'
    AZURE = 'azure'


class ProjectStatus:
    """Statuses that a project can be set to."""

    ACTIVE = 'ACTIVE'
    SUSPENDED = 'SUSPENDED'

    ALL = (ACTIVE, SUSPENDED)


class Credential(NamedTuple):
    """API key and secret of an OpenTok project."""

    api_key: str
    """Public identifier of the project."""

    api_secret: str
    """Shared secret used to sign tokens. Never sent over the wire."""

    def __repr__(self) -> str:
        """Represent the credential without exposing the secret."""
        return f"Credential(api_key='{self.api_key}', api_secret='***')"


class SessionIdentity(NamedTuple):
    """Metadata embedded in an opaque session ID."""

    api_key: str
    """API key of the project that created the session."""

    location: str
    """Location hint given when the session was created (may be empty)."""

    create_time: datetime
    """When the session was created."""


class AccessTokenFields(NamedTuple):
    """The signed fields of a connection token, all in their string form."""

    session_id: str
    create_time: str
    """Seconds since epoch."""

    expire_time: str
    """Seconds since epoch. Never earlier than :attr:`create_time`."""

    nonce: str
    role: str
    connection_data: str = ''
    initial_layout_class_list: str = ''
    """Comma-joined layout classes."""


class TokenOptions(NamedTuple):
    """Caller options for generating a connection token."""

    role: Optional[str] = None
    """One of :attr:`Role.ALL`. Defaults to :attr:`Role.PUBLISHER`."""

    data: str = ''
    """Connection metadata, at most 1024 characters."""

    expire_time: Optional[Union[int, datetime]] = None
    """Absolute expiration; defaults to 24 hours after creation."""

    initial_layout_class_list: Sequence[str] = ()
    """Layout classes of streams published by the client."""


class SessionOptions(NamedTuple):
    """Options for creating a session."""

    archive_mode: Optional[str] = None
    """One of :class:`ArchiveMode`."""

    location: Optional[str] = None
    """IP address used to situate the session in the global network."""

    media_mode: Optional[str] = None
    """One of :class:`MediaMode`."""


class Session(NamedTuple):
    """A session, as returned by the API."""

    session_id: str
    project_id: str = ''
    create_dt: str = ''
    media_server_url: str = ''


class Layout(NamedTuple):
    """Layout of a composed archive or broadcast."""

    type: str
    """One of :attr:`LayoutType.ALL`."""

    stylesheet: Optional[str] = None
    """CSS for :attr:`LayoutType.CUSTOM` layouts only."""


class ArchiveOptions(NamedTuple):
    """Options for starting an archive."""

    name: Optional[str] = None
    has_audio: Optional[bool] = None
    has_video: Optional[bool] = None
    layout: Optional[Layout] = None
    output_mode: Optional[str] = None
    """One of :attr:`OutputMode.ALL`."""

    resolution: Optional[str] = None
    """One of :attr:`Resolution.ALL`."""


class Archive(NamedTuple):
    """An archive, as returned by the API."""

    id: str
    status: str = ''
    name: Optional[str] = None
    reason: str = ''
    session_id: str = ''
    project_id: int = 0
    created_at: int = 0
    """Milliseconds since epoch."""

    size: int = 0
    duration: int = 0
    """Duration in seconds."""

    output_mode: str = ''
    has_audio: bool = True
    has_video: bool = True
    resolution: Optional[str] = None
    url: Optional[str] = None
    """Download URL, once the archive is available."""


class ArchiveList(NamedTuple):
    """A page of archives, newest first."""

    count: int = 0
    """Total number of archives, not just those in :attr:`items`."""

    items: List[Archive] = []


class ArchiveListOptions(NamedTuple):
    """Filters for listing archives."""

    offset: int = 0
    count: int = 0
    session_id: Optional[str] = None


class AmazonS3Config(NamedTuple):
    """Amazon S3 (or S3-compatible) upload target."""

    access_key: str
    secret_key: str
    bucket: str
    endpoint: Optional[str] = None


class AzureConfig(NamedTuple):
    """Microsoft Azure upload target."""

    account_name: str
    account_key: str
    container: str
    domain: Optional[str] = None


class StorageOptions(NamedTuple):
    """Upload target for completed archives."""

    type: str
    """One of :class:`StorageType`."""

    config: Union[AmazonS3Config, AzureConfig, dict]

    fallback: Optional[str] = None
    """
    ``opentok`` keeps failed uploads available in the dashboard; ``none``
    discards them.
    """

    @classmethod
    def before_init(cls, data: dict) -> None:
        """Cast the config into the type that matches the storage type."""
        config = data.get('config')
        if not isinstance(config, dict):
            return
        if data.get('type') == StorageType.S3:
            data['config'] = from_dict(AmazonS3Config, config)
        elif data.get('type') == StorageType.AZURE:
            data['config'] = from_dict(AzureConfig, config)


class RTMPConfig(NamedTuple):
    """An RTMP output of a broadcast."""

    id: str
    server_url: str
    stream_name: str
    """For example the YouTube Live stream name or the Facebook stream key."""

    status: Optional[str] = None
    """Only present in responses."""


class BroadcastOutputOptions(NamedTuple):
    """The HLS and/or RTMP outputs of a broadcast."""

    hls: Optional[dict] = None
    """Set to ``{}`` to request an HLS output."""

    rtmp: List[RTMPConfig] = []


class BroadcastOptions(NamedTuple):
    """Options for starting a live streaming broadcast."""

    outputs: BroadcastOutputOptions
    layout: Optional[Layout] = None
    max_duration: Optional[int] = None
    """Maximum duration in seconds."""

    resolution: Optional[str] = None


class BroadcastURLs(NamedTuple):
    """Where the HLS and RTMP outputs of a broadcast can be found."""

    hls: Optional[str] = None
    rtmp: List[RTMPConfig] = []


class Broadcast(NamedTuple):
    """A broadcast, as returned by the API."""

    id: str
    session_id: str = ''
    project_id: int = 0
    created_at: int = 0
    updated_at: int = 0
    resolution: Optional[str] = None
    status: str = ''
    broadcast_urls: Optional[BroadcastURLs] = None


class BroadcastList(NamedTuple):
    """A page of broadcasts, newest first."""

    count: int = 0
    items: List[Broadcast] = []


class BroadcastListOptions(NamedTuple):
    """Filters for listing broadcasts."""

    offset: int = 0
    count: int = 0
    session_id: Optional[str] = None


class Stream(NamedTuple):
    """A stream published in a session."""

    id: str
    video_type: str = ''
    """Either ``camera`` or ``screen``."""

    name: str = ''
    layout_class_list: List[str] = []


class StreamList(NamedTuple):
    """Streams of a session."""

    count: int = 0
    items: List[Stream] = []


class StreamClass(NamedTuple):
    """Layout classes to assign to a stream."""

    id: str
    layout_class_list: List[str] = []


class SignalData(NamedTuple):
    """A signal sent to clients of a session."""

    type: str
    """Clients can filter on this when listening for signals."""

    data: str


class SIPAuth(NamedTuple):
    """HTTP digest credentials for the SIP INVITE request."""

    username: str
    password: str


class SIP(NamedTuple):
    """The SIP endpoint to dial."""

    ALIASES = {'caller': 'from'}

    uri: str
    caller: Optional[str] = None
    """Number or string sent to the SIP endpoint as the caller."""

    headers: Optional[Dict[str, str]] = None
    """Custom headers added to the SIP INVITE request."""

    auth: Optional[SIPAuth] = None
    secure: Optional[bool] = None
    """Whether media must be transmitted encrypted."""


class DialOptions(NamedTuple):
    """Options for connecting a SIP endpoint to a session."""

    sip: SIP
    token_data: str = ''
    """Connection data for the token generated for the SIP participant."""


class SIPCall(NamedTuple):
    """A SIP call, as returned by the API."""

    id: str
    connection_id: str = ''
    stream_id: str = ''


class Project(NamedTuple):
    """A project, as returned by the account API."""

    id: str
    """The project API key."""

    secret: str = ''
    status: str = ''
    """``VALID``, ``ACTIVE`` or ``SUSPENDED``."""

    name: str = ''
    created_at: int = 0
    environment_name: str = ''
    environment_description: str = ''


# Helpers and private functions.


def to_dict(obj: tuple) -> dict:
    """
    Generate the JSON representation of a NamedTuple instance.

    Fields are renamed to their camelCase wire names (or to the name given in
    the class's ``ALIASES``), fields set to ``None`` are left out, and child
    NamedTuple instances are cast recursively.

    Parameters
    ----------
    obj : tuple
        A NamedTuple instance.

    Returns
    -------
    dict

    """
    if not hasattr(obj, '_asdict'):  # NamedTuple-generated classes have this.
        return {}
    data = obj._asdict()  # type: ignore
    _data = {}

    def _cast(obj: Any) -> Any:
        if hasattr(obj, '_asdict'):
            obj = to_dict(obj)
        elif isinstance(obj, datetime):
            obj = obj.isoformat()
        elif isinstance(obj, (list, tuple)):
            obj = [_cast(o) for o in obj]
        return obj

    for key, value in data.items():
        if value is None:
            continue
        _data[_wire_name(type(obj), key)] = _cast(value)
    return _data


def from_dict(cls: type, data: dict) -> Any:
    """
    Generate a NamedTuple instance from a dict, with recursion.

    This is the inverse of :func:`to_dict`. Each field is looked up under its
    wire name first and then under its own name, so that both camelCase and
    snake_case payloads can be loaded. Keys that do not correspond to a field
    are ignored.

    Parameters
    ----------
    cls: type
        Any NamedTuple class.

    data: dict
        Data with which to instantiate ``cls`` and its children.

    Returns
    -------
    NamedTuple
        An instance of ``cls``.
    """
    _data = {}
    for field, field_type in get_type_hints(cls).items():
        wire_name = _wire_name(cls, field)
        if wire_name in data:
            value = data[wire_name]
        elif field in data:
            value = data[field]
        else:
            continue
        _data[field] = _cast_value(field_type, value)
    if hasattr(cls, 'before_init'):
        cls.before_init(_data)
    return cls(**_data)


def _wire_name(cls: type, field: str) -> str:
    """Get the name of a field in the API's JSON."""
    aliases: Dict[str, str] = getattr(cls, 'ALIASES', {})
    if field in aliases:
        return aliases[field]
    head, *rest = field.split('_')
    return head + ''.join(part.title() for part in rest)


def _is_a_namedtuple(field_type: Any) -> bool:
    """Determine whether or not a field type is a NamedTuple class."""
    return isinstance(field_type, type) and issubclass(field_type, tuple) \
        and hasattr(field_type, '_fields')


def _cast_value(field_type: Any, value: Any) -> Any:
    """Cast a JSON value into the type expected by a field."""
    if value is None:
        return None
    origin = get_origin(field_type)
    if origin is Union:
        # Only Optional[X] is unambiguous; anything else is left as is.
        members = [t for t in get_args(field_type) if t is not type(None)]
        if len(members) == 1:
            return _cast_value(members[0], value)
        return value
    if origin is list and isinstance(value, list):
        item_type = get_args(field_type)[0]
        return [_cast_value(item_type, item) for item in value]
    if _is_a_namedtuple(field_type) and isinstance(value, dict):
        return from_dict(field_type, value)
    return value
