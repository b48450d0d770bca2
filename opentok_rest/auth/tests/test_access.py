"""Tests for :mod:`opentok_rest.auth.access`."""

from unittest import TestCase
from base64 import b64decode, b64encode
from datetime import datetime, timedelta
from urllib.parse import parse_qs
import random
import string

from hypothesis import given
from hypothesis import strategies as st
from pytz import UTC

from .. import access
from ...domain import AccessTokenFields, Credential, Role, TokenOptions
from ...exceptions import InvalidArgument, SessionIDDecodeError, Unauthorized

API_KEY = '<your api key here>'
API_SECRET = '<your api secret here>'

SESSION_ID = ('1_MX40MDAwMDAwMX5-MTU3Nzg2NTYwMDAwMH54N2I0OE1RZ0RmK1lRRnFQUWg4'
              'dlZmT0t-QX4')
"""A session of API key ``40000001``."""

OWN_SESSION_ID = ('1_MX48eW91ciBhcGkga2V5IGhlcmU-fn4xNTc3ODY1NjAwMDAwfng3YjQ4'
                  'TVFnRGYrWVFGcVBRaDh2VmZPS34')
"""A session of API key ``<your api key here>``."""

NOW = 1577865600


def make_session_id(api_key, location, created_ms, sentinel='1_'):
    """Pack session metadata the way the API lays out session IDs."""
    raw = f'1~{api_key}~{location}~{created_ms}~x7b48MQgDf~A~'
    encoded = b64encode(raw.encode('utf-8')).decode('ascii')
    return sentinel + encoded.rstrip('=').replace('+', '-').replace('/', '_')


def unpack(token):
    """Get the partner ID, signature and token fields out of a token."""
    assert token.startswith('T1==')
    decoded = b64decode(token[4:]).decode('utf-8')
    partner, sig = decoded.split('&sig=', 1)
    signature, data_string = sig.split(':', 1)
    fields = {k: v[0] for k, v in
              parse_qs(data_string, keep_blank_values=True).items()}
    return partner[len('partner_id='):], signature, fields


class TestDecodeSessionID(TestCase):
    """Tests for :func:`.access.decode_session_id`."""

    def test_decode(self):
        """The API key, location and creation time are recovered."""
        identity = access.decode_session_id(SESSION_ID)
        self.assertEqual(identity.api_key, '40000001')
        self.assertEqual(identity.location, '')
        self.assertEqual(identity.create_time,
                         datetime.fromtimestamp(1577865600, tz=UTC))

    def test_decode_unpadded(self):
        """IDs whose payload needs base64 padding can be decoded."""
        identity = access.decode_session_id(OWN_SESSION_ID)
        self.assertEqual(identity.api_key, API_KEY)

    def test_malformed_base64(self):
        """An ID that is not base64 cannot be decoded."""
        with self.assertRaises(SessionIDDecodeError):
            access.decode_session_id('1_not*base64!')

    def test_too_few_fields(self):
        """An ID with fewer than four fields cannot be decoded."""
        payload = b64encode(b'1~40000001~').decode('ascii')
        with self.assertRaises(SessionIDDecodeError):
            access.decode_session_id('1_' + payload)

    def test_non_numeric_timestamp(self):
        """An ID whose creation time is not a number cannot be decoded."""
        payload = b64encode(b'1~40000001~~yesterday~x~').decode('ascii')
        with self.assertRaises(SessionIDDecodeError):
            access.decode_session_id('1_' + payload)

    def test_timestamp_out_of_range(self):
        """An ID whose creation time is not a representable date fails."""
        with self.assertRaises(SessionIDDecodeError):
            access.decode_session_id(
                make_session_id('40000001', '', 99999999999999999999)
            )

    def test_non_ascii(self):
        """An ID with characters outside of base64's alphabet fails."""
        with self.assertRaises(SessionIDDecodeError):
            access.decode_session_id('1_é' + 'A' * 10)

    def test_millisecond_precision(self):
        """The residual milliseconds of the creation time are kept."""
        identity = access.decode_session_id(
            make_session_id('40000001', '', 1577865600123)
        )
        self.assertEqual(
            identity.create_time,
            datetime.fromtimestamp(1577865600, tz=UTC)
            + timedelta(milliseconds=123)
        )

    @given(st.text(alphabet=string.ascii_letters + string.digits,
                   min_size=1),
           st.text(alphabet=string.ascii_letters + string.digits + '.:'),
           st.integers(min_value=0, max_value=4102444800000))
    def test_round_trip(self, api_key, location, created_ms):
        """Metadata packed into a session ID is recovered exactly."""
        identity = access.decode_session_id(
            make_session_id(api_key, location, created_ms)
        )
        self.assertEqual(identity.api_key, api_key)
        self.assertEqual(identity.location, location)
        self.assertEqual(
            identity.create_time,
            datetime.fromtimestamp(created_ms // 1000, tz=UTC)
            + timedelta(milliseconds=created_ms % 1000)
        )


class TestEncode(TestCase):
    """Tests for :func:`.access.encode`."""

    def setUp(self):
        """Create a credential and the fields of the published example."""
        self.credential = Credential(API_KEY, API_SECRET)
        self.fields = AccessTokenFields(
            session_id=SESSION_ID,
            create_time='1577865600',
            expire_time='1577865600',
            nonce='0.49893371771268225',
            role='publisher',
            connection_data='foo=bar',
            initial_layout_class_list=''
        )

    def test_known_token(self):
        """The published example is reproduced byte for byte."""
        expected = (
            'T1==cGFydG5lcl9pZD08eW91ciBhcGkga2V5IGhlcmU+JnNpZz0yYjQyMzlkNjU4'
            'YTVkYmE0NGRhMGMyMmUzOTA2MWM5ZWI1ODQ1MTE1OmNvbm5lY3Rpb25fZGF0YT1m'
            'b28lM0RiYXImY3JlYXRlX3RpbWU9MTU3Nzg2NTYwMCZleHBpcmVfdGltZT0xNTc3'
            'ODY1NjAwJmluaXRpYWxfbGF5b3V0X2NsYXNzX2xpc3Q9Jm5vbmNlPTAuNDk4OTMz'
            'NzE3NzEyNjgyMjUmcm9sZT1wdWJsaXNoZXImc2Vzc2lvbl9pZD0xX01YNDBNREF3'
            'TURBd01YNS1NVFUzTnpnMk5UWXdNREF3TUg1NE4ySTBPRTFSWjBSbUsxbFJSbkZR'
            'VVdnNGRsWm1UMHQtUVg0'
        )
        self.assertEqual(access.encode(self.fields, self.credential), expected)

    def test_deterministic(self):
        """The same fields and credential always give the same token."""
        self.assertEqual(access.encode(self.fields, self.credential),
                         access.encode(self.fields, self.credential))

    def test_signature_depends_on_secret(self):
        """Another secret gives another signature."""
        other = Credential(API_KEY, 'another secret')
        _, signature, _ = unpack(access.encode(self.fields, self.credential))
        _, other_signature, _ = unpack(access.encode(self.fields, other))
        self.assertNotEqual(signature, other_signature)


class TestGenerate(TestCase):
    """Tests for :func:`.access.generate`."""

    def setUp(self):
        """Create a credential."""
        self.credential = Credential(API_KEY, API_SECRET)

    def test_defaults(self):
        """Without options, a publisher token valid for 24 hours is made."""
        token = access.generate(self.credential, OWN_SESSION_ID, now=NOW,
                                rng=random.Random(1))
        partner_id, _, fields = unpack(token)
        self.assertEqual(partner_id, API_KEY)
        self.assertEqual(fields['session_id'], OWN_SESSION_ID)
        self.assertEqual(fields['role'], 'publisher')
        self.assertEqual(fields['create_time'], str(NOW))
        self.assertEqual(fields['expire_time'], str(NOW + 86400))
        self.assertEqual(fields['connection_data'], '')
        self.assertEqual(fields['initial_layout_class_list'], '')
        self.assertEqual(fields['nonce'], repr(random.Random(1).random()))

    def test_deterministic_with_injected_rng(self):
        """A seeded random source gives the same token."""
        first = access.generate(self.credential, OWN_SESSION_ID, now=NOW,
                                rng=random.Random(42))
        second = access.generate(self.credential, OWN_SESSION_ID, now=NOW,
                                 rng=random.Random(42))
        self.assertEqual(first, second)

    def test_options(self):
        """Role, data, expiration and layout classes are applied."""
        options = TokenOptions(role=Role.MODERATOR, data='name=Jane',
                               expire_time=NOW + 60,
                               initial_layout_class_list=['focus', 'main'])
        token = access.generate(self.credential, OWN_SESSION_ID, options,
                                now=NOW)
        _, _, fields = unpack(token)
        self.assertEqual(fields['role'], 'moderator')
        self.assertEqual(fields['connection_data'], 'name=Jane')
        self.assertEqual(fields['expire_time'], str(NOW + 60))
        self.assertEqual(fields['initial_layout_class_list'], 'focus,main')

    def test_expire_time_as_datetime(self):
        """The expiration can be given as a datetime."""
        options = TokenOptions(
            expire_time=datetime.fromtimestamp(NOW + 3600, tz=UTC)
        )
        token = access.generate(self.credential, OWN_SESSION_ID, options,
                                now=NOW)
        _, _, fields = unpack(token)
        self.assertEqual(fields['expire_time'], str(NOW + 3600))

    def test_signature_verifies(self):
        """The signature is the HMAC-SHA1 of the signed query string."""
        import hashlib
        import hmac
        token = access.generate(self.credential, OWN_SESSION_ID, now=NOW)
        decoded = b64decode(token[4:]).decode('utf-8')
        signature, data_string = decoded.split('&sig=', 1)[1].split(':', 1)
        expected = hmac.new(API_SECRET.encode('utf-8'),
                            data_string.encode('utf-8'),
                            hashlib.sha1).hexdigest()
        self.assertEqual(signature, expected)

    def test_empty_session_id(self):
        """A session ID is required."""
        with self.assertRaises(InvalidArgument):
            access.generate(self.credential, '')

    def test_session_of_another_key(self):
        """A token cannot be made for another project's session."""
        with self.assertRaises(Unauthorized):
            access.generate(self.credential, SESSION_ID)

    def test_undecodable_session(self):
        """A session ID that cannot be decoded is treated as foreign."""
        with self.assertRaises(Unauthorized):
            access.generate(self.credential, '1_garbage')
        with self.assertRaises(Unauthorized):
            access.generate(self.credential, '1_é' + 'A' * 10)
        with self.assertRaises(Unauthorized):
            access.generate(
                self.credential,
                make_session_id(API_KEY, '', 99999999999999999999)
            )

    def test_invalid_role(self):
        """Only publisher, subscriber and moderator roles are allowed."""
        with self.assertRaises(InvalidArgument):
            access.generate(self.credential, OWN_SESSION_ID,
                            TokenOptions(role='admin'))

    def test_expiration_in_the_past(self):
        """The expiration cannot be before the creation time."""
        with self.assertRaises(InvalidArgument):
            access.generate(self.credential, OWN_SESSION_ID,
                            TokenOptions(expire_time=NOW - 1), now=NOW)

    def test_expiration_equal_to_creation(self):
        """The expiration can be the creation time."""
        token = access.generate(self.credential, OWN_SESSION_ID,
                                TokenOptions(expire_time=NOW), now=NOW)
        _, _, fields = unpack(token)
        self.assertEqual(fields['expire_time'], str(NOW))

    def test_data_too_long(self):
        """Connection data is capped at 1024 characters."""
        access.generate(self.credential, OWN_SESSION_ID,
                        TokenOptions(data='x' * 1024))
        with self.assertRaises(InvalidArgument):
            access.generate(self.credential, OWN_SESSION_ID,
                            TokenOptions(data='x' * 1025))

    def test_layout_classes_too_long(self):
        """The joined layout class list is capped at 1024 characters."""
        classes = ['x' * 512, 'y' * 511]    # 1024 with the comma.
        token = access.generate(
            self.credential, OWN_SESSION_ID,
            TokenOptions(initial_layout_class_list=classes)
        )
        _, _, fields = unpack(token)
        self.assertEqual(len(fields['initial_layout_class_list']), 1024)

        classes = ['x' * 512, 'y' * 512]    # 1025 with the comma.
        with self.assertRaises(InvalidArgument):
            access.generate(self.credential, OWN_SESSION_ID,
                            TokenOptions(initial_layout_class_list=classes))

    def test_layout_classes_as_string(self):
        """A single string is not taken as a list of one-letter classes."""
        with self.assertRaises(InvalidArgument):
            access.generate(self.credential, OWN_SESSION_ID,
                            TokenOptions(initial_layout_class_list='focus'))
