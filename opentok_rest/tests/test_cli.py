"""Tests for the ``opentok-token`` command."""

from unittest import TestCase
from base64 import b64decode

from click.testing import CliRunner

from .. import cli
from ..auth import tokens

API_KEY = '40000001'
API_SECRET = 'secret'
SESSION_ID = ('1_MX40MDAwMDAwMX5-MTU3Nzg2NTYwMDAwMH54N2I0OE1RZ0RmK1lRRnFQUWg4'
              'dlZmT0t-QX4')


class TestJWTCommand(TestCase):
    """``opentok-token jwt`` prints a service JWT."""

    def test_project_scope(self):
        """A project token is printed by default."""
        result = CliRunner().invoke(cli.main, ['--api-key', API_KEY,
                                               '--api-secret', API_SECRET,
                                               'jwt'])
        self.assertEqual(result.exit_code, 0, result.output)
        claims = tokens.decode(result.output.strip(), API_SECRET)
        self.assertEqual(claims['ist'], 'project')
        self.assertEqual(claims['iss'], API_KEY)

    def test_credential_from_environment(self):
        """The credential can be read from the environment."""
        result = CliRunner().invoke(
            cli.main, ['jwt', '--scope', 'account'],
            env={'OPENTOK_API_KEY': API_KEY, 'OPENTOK_API_SECRET': API_SECRET}
        )
        self.assertEqual(result.exit_code, 0, result.output)
        claims = tokens.decode(result.output.strip(), API_SECRET)
        self.assertEqual(claims['ist'], 'account')

    def test_missing_credential(self):
        """The command fails without a credential."""
        result = CliRunner().invoke(
            cli.main, ['jwt'],
            env={'OPENTOK_API_KEY': '', 'OPENTOK_API_SECRET': ''}
        )
        self.assertEqual(result.exit_code, 2)

    def test_unknown_scope(self):
        """Only project and account scopes are accepted."""
        result = CliRunner().invoke(cli.main, ['--api-key', API_KEY,
                                               '--api-secret', API_SECRET,
                                               'jwt', '--scope', 'user'])
        self.assertEqual(result.exit_code, 2)


class TestConnectionCommand(TestCase):
    """``opentok-token connection`` prints a connection token."""

    def test_connection_token(self):
        """The options are signed into the token."""
        result = CliRunner().invoke(cli.main, [
            '--api-key', API_KEY, '--api-secret', API_SECRET,
            'connection', SESSION_ID, '--role', 'moderator',
            '--data', 'name=Jane', '--layout-class', 'focus',
            '--layout-class', 'main'
        ])
        self.assertEqual(result.exit_code, 0, result.output)
        token = result.output.strip()
        self.assertTrue(token.startswith('T1=='))
        decoded = b64decode(token[4:]).decode('utf-8')
        self.assertIn('role=moderator', decoded)
        self.assertIn('connection_data=name%3DJane', decoded)
        self.assertIn('initial_layout_class_list=focus%2Cmain', decoded)

    def test_foreign_session(self):
        """A session of another project is refused."""
        result = CliRunner().invoke(cli.main, [
            '--api-key', '40000002', '--api-secret', API_SECRET,
            'connection', SESSION_ID
        ])
        self.assertEqual(result.exit_code, 1)
        self.assertIn('session belongs to the API key', result.output)

    def test_expired(self):
        """An expiration in the past is refused."""
        result = CliRunner().invoke(cli.main, [
            '--api-key', API_KEY, '--api-secret', API_SECRET,
            'connection', SESSION_ID, '--expire-time', '1'
        ])
        self.assertEqual(result.exit_code, 1)
