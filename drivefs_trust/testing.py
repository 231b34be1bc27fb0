# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

from unittest import TestCase
from os.path import join
from shutil import rmtree
from tempfile import mkdtemp

from drivefs_trust.config import TrustConfig
from drivefs_trust.exceptions import FetchError, RelaunchError
from drivefs_trust.notify import Notifier

import logging

logger = logging.getLogger(__name__)

TENANT = 'acme.goskope.com'
ORG_KEY = 'Zx81Kq'
ROOT_CA = (b'-----BEGIN CERTIFICATE-----\nUk9PVA==\n'
           b'-----END CERTIFICATE-----\n')
INTERMEDIATE_CA = (b'-----BEGIN CERTIFICATE-----\nSU5URVI=\n'
                   b'-----END CERTIFICATE-----\n')
PUBLIC_BUNDLE = (b'##\n## Bundle of CA Root Certificates\n##\n'
                 b'-----BEGIN CERTIFICATE-----\nTU9aSUxMQQ==\n'
                 b'-----END CERTIFICATE-----\n')


class FakeFetcher(object):
    """Serves certificate bytes from memory

    `payloads` is the list of bytes returned for each source, in order. An
    Exception instance in the list makes the matching fetch fail.
    """
    def __init__(self, payloads):
        self.payloads = list(payloads)
        self.calls = []

    def fetch(self, source):
        self.calls.append(source)
        payload = self.payloads[len(self.calls) - 1]
        if isinstance(payload, Exception):
            raise FetchError(source.description, str(payload))
        return payload


class FakeTrustStore(object):
    def __init__(self, trusted_path=None):
        self.trusted_path = trusted_path
        self.key = 'TrustedRootCertsFile'
        self.writes = []

    def get_trusted_path(self):
        return self.trusted_path

    def set_trusted_path(self, path):
        self.writes.append(path)
        self.trusted_path = path


class FakeController(object):
    def __init__(self, launch_fails=False):
        self.launch_fails = launch_fails
        self.terminated = 0
        self.launched = 0

    def terminate(self):
        self.terminated += 1

    def launch(self):
        self.launched += 1
        if self.launch_fails:
            raise RelaunchError("Failed to restart Google Drive. Please open "
                                "the app manually.")


class RecordingSink(logging.Handler):
    """Keeps the formatted status lines in memory"""
    def __init__(self):
        super(RecordingSink, self).__init__()
        self.lines = []
        self.levels = []

    def emit(self, record):
        self.lines.append(self.format(record))
        self.levels.append(record.levelname)


class ReconcilerTestCase(TestCase):
    """Gives every test a scratch certificate directory and fake
    collaborators"""
    def setUp(self):
        logger.debug('Entered ReconcilerTestCase.setUp()')
        self.cert_dir = mkdtemp()
        self.config = TrustConfig(TENANT, ORG_KEY,
                                  join(self.cert_dir, 'Netskope Certificates'),
                                  log_mode='none')
        self.sink = RecordingSink()
        self.notifier = Notifier([self.sink])
        self.trust_store = FakeTrustStore()
        self.controller = FakeController()
        self.sleeps = []

    def tearDown(self):
        logger.debug('Entered ReconcilerTestCase.tearDown()')
        self.notifier.close()
        rmtree(self.cert_dir)

    def _fetcher(self, payloads=None):
        if payloads is None:
            payloads = [ROOT_CA, INTERMEDIATE_CA, PUBLIC_BUNDLE]
        return FakeFetcher(payloads)

    def _write(self, fp, data):
        with open(fp, 'wb') as f:
            f.write(data)

    def _read(self, fp):
        with open(fp, 'rb') as f:
            return f.read()
