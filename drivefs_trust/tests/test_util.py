# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

from unittest import TestCase, main
from os import getcwd, close
from os.path import exists
from hashlib import sha256
from tempfile import mkstemp

from drivefs_trust.util import system_call, file_digest, remove_if_exists


class UtilTests(TestCase):
    def setUp(self):
        self._clean_up_files = []

    def tearDown(self):
        for fp in self._clean_up_files:
            remove_if_exists(fp)

    def test_system_call(self):
        obs_out, obs_err, obs_val = system_call("pwd")
        self.assertEqual(obs_out, "%s\n" % getcwd())
        self.assertEqual(obs_err, "")
        self.assertEqual(obs_val, 0)

    def test_system_call_tokens(self):
        obs_out, obs_err, obs_val = system_call(["echo", "Google Drive"])
        self.assertEqual(obs_out, "Google Drive\n")
        self.assertEqual(obs_val, 0)

    def test_system_call_error(self):
        obs_out, obs_err, obs_val = system_call("IHopeThisCommandDoesNotExist")
        self.assertEqual(obs_out, "")
        self.assertTrue("not found" in obs_err)
        self.assertEqual(obs_val, 127)

    def test_system_call_tokens_error(self):
        obs_out, obs_err, obs_val = system_call(
            ["IHopeThisCommandDoesNotExist"])
        self.assertEqual(obs_out, "")
        self.assertEqual(obs_val, 127)

    def test_file_digest(self):
        data = b'-----BEGIN CERTIFICATE-----\n' * 5000
        fp = self._tmp_file(data)
        self.assertEqual(file_digest(fp), sha256(data).hexdigest())

    def test_file_digest_empty(self):
        fp = self._tmp_file(b'')
        self.assertEqual(file_digest(fp), sha256(b'').hexdigest())

    def test_file_digest_missing(self):
        with self.assertRaises(OSError):
            file_digest('/this/path/does/not/exist.pem')

    def test_remove_if_exists(self):
        fp = self._tmp_file(b'x')
        remove_if_exists(fp)
        self.assertFalse(exists(fp))
        # a second call is a no-op
        remove_if_exists(fp)

    def _tmp_file(self, data):
        fd, fp = mkstemp()
        close(fd)
        with open(fp, 'wb') as f:
            f.write(data)
        self._clean_up_files.append(fp)
        return fp


if __name__ == '__main__':
    main()
